"""
Decode options.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class DecodeOptions:
    """Decoder strictness configuration."""
    validate_lengths: bool = False  # included vs original, params_len vs buffer
    trim_parameters: bool = False   # bound HciCommand.params to params_len

    @classmethod
    def strict(cls) -> 'DecodeOptions':
        return cls(validate_lengths=True, trim_parameters=True)


DEFAULT_OPTIONS = DecodeOptions()
