"""
Brief Submission Service

Creates the brief document and appends the spreadsheet row. The Google
clients are blocking, so the work runs in a worker thread and the wizard
awaits it with its own timeout.
"""

import asyncio
from dataclasses import dataclass
from typing import Optional

from brand_brief.config import BriefConfig
from brand_brief.google_auth import build_services, load_or_refresh_credentials
from brand_brief.services.google_docs import BriefDocumentService
from brand_brief.services.google_sheets import BriefSheetService
from brand_brief.wizard.logging_config import get_logger
from brand_brief.wizard.normalizer import CanonicalSubmissionPayload


logger = get_logger("services.submission")


@dataclass(frozen=True)
class SubmissionResult:
    """Links to everything a successful submission produced."""
    document_id: Optional[str] = None
    document_url: Optional[str] = None
    sheet_url: Optional[str] = None
    sheet_range: Optional[str] = None
    dry_run: bool = False


class BriefSubmissionService:
    """Submits a brief to Google Docs and Google Sheets.

    Either both outputs are produced or neither is kept: when the row
    cannot be appended the freshly created document is deleted.
    """

    def __init__(self, documents: BriefDocumentService, sheets: BriefSheetService):
        self.documents = documents
        self.sheets = sheets

    async def submit(self, payload: CanonicalSubmissionPayload) -> SubmissionResult:
        return await asyncio.to_thread(self.submit_sync, payload)

    def submit_sync(self, payload: CanonicalSubmissionPayload) -> SubmissionResult:
        document = self.documents.create(payload)
        logger.info("Created brief document %s", document.document_id)

        try:
            sheet_range = self.sheets.append(payload)
        except Exception:
            self.documents.discard(document.document_id)
            raise

        return SubmissionResult(
            document_id=document.document_id,
            document_url=document.url,
            sheet_url=self.sheets.url,
            sheet_range=sheet_range,
        )


class DryRunSubmitter:
    """Stands in for the Google services; keeps the last payload."""

    def __init__(self):
        self.payloads = []

    async def submit(self, payload: CanonicalSubmissionPayload) -> SubmissionResult:
        self.payloads.append(payload)
        logger.info("Dry run: brief for '%s' not sent", payload.project_name)
        return SubmissionResult(dry_run=True)


def build_submission_service(config: BriefConfig) -> BriefSubmissionService:
    """Wire the Google-backed submission service from configuration.

    Raises:
        ConfigError: if the template or spreadsheet id is missing
        CredentialError: if no usable OAuth token is stored
    """
    template_id = config.require("docs_template_id")
    spreadsheet_id = config.require("sheets_id")

    credentials = load_or_refresh_credentials(config.token_path)
    services = build_services(credentials)

    return BriefSubmissionService(
        documents=BriefDocumentService(
            services.drive, services.docs, template_id, share=config.share_document
        ),
        sheets=BriefSheetService(services.sheets, spreadsheet_id, tab=config.sheet_tab),
    )
