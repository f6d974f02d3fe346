"""
Google Docs Brief Document

Copies the brief template in Drive, fills every placeholder with the
payload values and optionally shares the copy as read-only to anyone with
the link.
"""

from dataclasses import dataclass
from typing import Any, Dict, List

from googleapiclient.errors import HttpError

from brand_brief.wizard.exceptions import SubmissionError
from brand_brief.wizard.logging_config import get_logger
from brand_brief.wizard.normalizer import FALLBACK, CanonicalSubmissionPayload


logger = get_logger("services.google_docs")

DOCUMENT_URL = "https://docs.google.com/document/d/{document_id}/edit"


@dataclass(frozen=True)
class DocumentResult:
    document_id: str
    url: str


def replacement_requests(replacements: Dict[str, str]) -> List[Dict[str, Any]]:
    """One replaceAllText request per placeholder."""
    return [
        {
            "replaceAllText": {
                "containsText": {"text": placeholder, "matchCase": True},
                "replaceText": value,
            }
        }
        for placeholder, value in replacements.items()
    ]


def document_title(payload: CanonicalSubmissionPayload) -> str:
    name = payload.company if payload.company != FALLBACK else payload.project_name
    return f"Brand Brief - {name} - {payload.date}"


class BriefDocumentService:
    """Creates the filled brief document from a template."""

    def __init__(self, drive: Any, docs: Any, template_id: str, share: bool = True):
        self.drive = drive
        self.docs = docs
        self.template_id = template_id
        self.share = share

    def create(self, payload: CanonicalSubmissionPayload) -> DocumentResult:
        """Copy, fill and share the template.

        The copy is deleted again when filling or sharing it fails.

        Raises:
            SubmissionError: if any Drive or Docs call fails
        """
        try:
            copied = self.drive.files().copy(
                fileId=self.template_id,
                body={"name": document_title(payload)},
            ).execute()
        except HttpError as e:
            raise SubmissionError(
                "Could not copy the brief template",
                service="docs",
                details=str(e)
            ) from e

        document_id = copied["id"]
        logger.debug("Copied template %s to %s", self.template_id, document_id)

        try:
            self.docs.documents().batchUpdate(
                documentId=document_id,
                body={"requests": replacement_requests(payload.replacements())},
            ).execute()

            if self.share:
                self.drive.permissions().create(
                    fileId=document_id,
                    body={"role": "reader", "type": "anyone"},
                ).execute()
        except Exception as e:
            self.discard(document_id)
            if isinstance(e, HttpError):
                raise SubmissionError(
                    "Could not create the brief document",
                    service="docs",
                    details=str(e)
                ) from e
            raise

        return DocumentResult(document_id=document_id, url=DOCUMENT_URL.format(document_id=document_id))

    def delete(self, document_id: str) -> None:
        """Remove a document created by an incomplete submission."""
        self.drive.files().delete(fileId=document_id).execute()

    def discard(self, document_id: str) -> None:
        """Delete a document, logging instead of raising when Drive refuses."""
        try:
            self.delete(document_id)
            logger.info("Deleted incomplete brief document %s", document_id)
        except (HttpError, OSError) as e:
            logger.warning("Could not delete brief document %s: %s", document_id, e)
