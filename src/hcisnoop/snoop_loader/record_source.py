"""
IRecordSource Interface

The contract every btsnoop record source follows: open, iterate records in
file order, report session metadata, close. Sources are consumed once.
"""

from abc import ABC, abstractmethod
from typing import Iterator, Dict, Any

from ..models.record import Record


class IRecordSource(ABC):
    """
    Abstract base class for btsnoop record sources.

    Rules for implementers:
    1. Records are yielded in file order
    2. A partial trailing record ends iteration, it is not an error
    3. close() releases resources and is safe to call repeatedly
    """

    @abstractmethod
    def open(self):
        """
        Open the source and read the file header.

        Raises:
            FileNotFoundError: If the file doesn't exist
            MalformedHeaderError: If the identification pattern is wrong
            SnoopTruncatedError: If the header is incomplete
        """
        pass

    @abstractmethod
    def __iter__(self) -> Iterator[Record]:
        """Iterate through records in capture order."""
        pass

    @abstractmethod
    def get_session_info(self) -> Dict[str, Any]:
        """
        Return log metadata.

        Returns dictionary with AT LEAST:
        - 'record_count': Records yielded so far
        - 'time_range': Tuple of (first_us, last_us) in btsnoop microseconds
        - 'link_type': Link type name from the header
        - 'file_size': Size in bytes (for file sources)
        """
        pass

    @abstractmethod
    def close(self):
        """Release resources. MUST be safe to call multiple times."""
        pass

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
