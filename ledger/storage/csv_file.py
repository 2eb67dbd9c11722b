"""
Flat-File Storage Implementation

DESIGN DECISION: The ledger lives in a single text file, one record per
line, no header. It is small (a household's transactions), so every save
rewrites the whole file.

Writes are atomic: the records go to a temporary file in the same
directory, which then replaces the ledger with os.replace. A crash
mid-write leaves the previous ledger intact.

TRADEOFFS:
- Whole-file rewrite on every save (fine for personal volumes)
- No locking (single process owns the file)
"""

import os
import tempfile
from pathlib import Path
from typing import Optional, Sequence, Union

import structlog
from tenacity import (
    RetryError,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ledger.config import LedgerSettings, MalformedLinePolicy, get_settings
from ledger.models.transaction import LoadResult, SkippedRecord, Transaction
from ledger.storage.interface import (
    LedgerNotReadableError,
    LedgerStorageInterface,
    MalformedRecordError,
    PersistenceError,
)
from ledger.storage.serializer import transaction_from_line, transaction_to_line


logger = structlog.get_logger(__name__)


class CsvFileStorage(LedgerStorageInterface):
    """
    Flat-file implementation of ledger storage.

    Records are csv-quoted so free text may contain commas.
    """

    def __init__(
        self,
        path: Union[str, Path, None] = None,
        malformed_lines: Optional[MalformedLinePolicy] = None,
        retry_attempts: Optional[int] = None,
        settings: Optional[LedgerSettings] = None,
    ):
        settings = settings or get_settings()
        self._path = Path(path) if path is not None else settings.data_file
        self._malformed_lines = malformed_lines or settings.malformed_lines
        self._retry_attempts = retry_attempts or settings.save_retry_attempts

    @property
    def path(self) -> Path:
        return self._path

    @property
    def location(self) -> str:
        return str(self._path)

    def load(self) -> tuple[list[Transaction], LoadResult]:
        """
        Read the ledger file, applying the malformed-line policy.

        Each physical line is parsed on its own, so an unbalanced quote
        spoils only its own line.
        """
        if not self._path.exists():
            logger.info("ledger_file_missing", path=self.location)
            return [], LoadResult(file_found=False)

        transactions: list[Transaction] = []
        skipped: list[SkippedRecord] = []

        try:
            with open(self._path, "r", newline="", encoding="utf-8") as f:
                for line_number, raw in enumerate(f, 1):
                    line = raw.rstrip("\r\n")
                    if not line.strip():
                        continue
                    try:
                        transactions.append(transaction_from_line(line))
                    except MalformedRecordError as e:
                        skipped.append(
                            self._handle_malformed(line_number, line, e.reason)
                        )
        except (OSError, UnicodeDecodeError) as e:
            raise LedgerNotReadableError(
                f"Failed to read ledger {self.location}: {e}"
            )

        return transactions, LoadResult(
            file_found=True,
            loaded=len(transactions),
            skipped=skipped,
        )

    def _handle_malformed(
        self,
        line_number: int,
        line: str,
        reason: str,
    ) -> SkippedRecord:
        if self._malformed_lines == MalformedLinePolicy.FAIL:
            raise MalformedRecordError(reason, line=line, line_number=line_number)

        logger.warning(
            "malformed_line_skipped",
            path=self.location,
            line_number=line_number,
            reason=reason,
        )
        return SkippedRecord(line_number=line_number, line=line, reason=reason)

    def save(self, transactions: Sequence[Transaction]) -> None:
        """Atomically replace the ledger file, retrying transient failures."""
        lines = [transaction_to_line(t) for t in transactions]

        try:
            for attempt in Retrying(
                stop=stop_after_attempt(self._retry_attempts),
                wait=wait_exponential(multiplier=0.1, max=1),
                retry=retry_if_exception_type(OSError),
                reraise=True,
            ):
                with attempt:
                    self._write_atomic(lines)
        except (OSError, RetryError) as e:
            raise PersistenceError(f"Failed to save ledger {self.location}: {e}")

        logger.debug("ledger_written", path=self.location, count=len(lines))

    def _write_atomic(self, lines: list[str]) -> None:
        directory = self._path.parent
        directory.mkdir(parents=True, exist_ok=True)

        fd, tmp_path = tempfile.mkstemp(
            prefix=f".{self._path.name}.",
            suffix=".tmp",
            dir=directory,
        )
        try:
            with os.fdopen(fd, "w", newline="", encoding="utf-8") as f:
                for line in lines:
                    f.write(line)
                    f.write("\n")
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self._path)
        except OSError:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise
