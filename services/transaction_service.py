"""
Upload processing service.
Parses a batch of CSV exports concurrently and commits it to a session
only if every file parsed.
"""
import asyncio
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from core.config import get_settings
from core.exceptions import DashboardError, FileProcessingError
from core.logger import setup_logger
from core.parsing import parse_uploaded_file
from core.presentation import ChartMode, build_chart_payload
from core.schema import RawTransaction, TransactionView, UploadedFile
from services.session import DashboardSession

logger = setup_logger(__name__)


class TransactionService:
    """Service for turning uploaded exports into dashboard views."""

    def __init__(self):
        """Initialize transaction service."""
        self.settings = get_settings()

    async def parse_batch(self, uploads: Sequence[UploadedFile]) -> List[RawTransaction]:
        """
        Parse every file of a batch concurrently.

        Args:
            uploads: Files in the order the user selected them

        Returns:
            Candidates of all files concatenated in upload order

        Raises:
            FileProcessingError: If any file fails; details name every failed file
        """
        if not uploads:
            return []

        semaphore = asyncio.Semaphore(self.settings.max_concurrent_parses)
        loop = asyncio.get_event_loop()

        async def parse_single(upload: UploadedFile) -> List[RawTransaction]:
            async with semaphore:
                # pandas parsing is synchronous; keep it off the event loop
                return await loop.run_in_executor(None, parse_uploaded_file, upload)

        logger.info(f"Parsing {len(uploads)} file(s)")
        results = await asyncio.gather(*(parse_single(u) for u in uploads), return_exceptions=True)

        failures: Dict[str, str] = {}
        for upload, result in zip(uploads, results):
            if isinstance(result, DashboardError):
                logger.error(f"Failed to parse {upload.filename}: {result.message}")
                failures[upload.filename] = result.message
            elif isinstance(result, Exception):
                logger.error(f"Unexpected error parsing {upload.filename}: {result}", exc_info=result)
                failures[upload.filename] = str(result)

        if failures:
            raise FileProcessingError(
                f"Failed to parse {len(failures)} of {len(uploads)} file(s); upload discarded",
                details={"failed_files": failures}
            )

        combined = [txn for result in results for txn in result]
        logger.info(f"Parsed {len(combined)} transactions from {len(uploads)} file(s)")
        return combined

    async def upload(self, session: DashboardSession, uploads: Sequence[UploadedFile]) -> int:
        """
        Parse a batch and, only if every file succeeds, replace the session data.

        Filters are reset on success. On failure, or when no files were
        selected, the session is left as it was.

        Returns:
            Number of raw transactions now held by the session
        """
        if not uploads:
            logger.info("No files selected; keeping current session data")
            return len(session.raw_transactions)

        transactions = await self.parse_batch(uploads)
        session.replace_transactions(transactions)
        return len(transactions)

    async def upload_paths(self, session: DashboardSession, paths: Sequence[Union[str, Path]]) -> int:
        """
        Read files from disk and upload them as one batch.

        Raises:
            DataNotFoundError: If a path does not exist
            FileProcessingError: If any file fails to parse
        """
        uploads = [UploadedFile.from_path(path) for path in paths]
        return await self.upload(session, uploads)

    def build_view(self, session: DashboardSession) -> TransactionView:
        return session.view()

    def build_chart(
        self,
        session: DashboardSession,
        mode: ChartMode = "category",
        view: Optional[TransactionView] = None,
    ) -> Dict[str, Any]:
        """
        Build the chart payload for the session's current filters.

        Args:
            session: Dashboard state
            mode: "category" or "time"
            view: Precomputed view to reuse

        Returns:
            Chart payload dict
        """
        if view is None:
            view = self.build_view(session)
        return build_chart_payload(
            view,
            session.merchant_selection,
            session.merchants,
            mode=mode,
            currency=self.settings.display_currency,
        )
