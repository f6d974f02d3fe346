"""
Google Sheets Brief Log

Appends one row per submitted brief, writing the header row first when the
tab is empty.
"""

from typing import Any, Optional

from googleapiclient.errors import HttpError

from brand_brief.wizard.exceptions import SubmissionError
from brand_brief.wizard.logging_config import get_logger
from brand_brief.wizard.normalizer import CanonicalSubmissionPayload, headers


logger = get_logger("services.google_sheets")

SHEET_URL = "https://docs.google.com/spreadsheets/d/{spreadsheet_id}/edit"


def tab_range(tab: str, cells: Optional[str] = None) -> str:
    """A1 range on a tab, quoting the tab name (``'Hoja 1'!A1``)."""
    quoted = "'" + tab.replace("'", "''") + "'"
    return f"{quoted}!{cells}" if cells else quoted


class BriefSheetService:
    """Writes briefs to a spreadsheet tab."""

    def __init__(self, sheets: Any, spreadsheet_id: str, tab: str = "Hoja 1"):
        self.sheets = sheets
        self.spreadsheet_id = spreadsheet_id
        self.tab = tab

    @property
    def url(self) -> str:
        return SHEET_URL.format(spreadsheet_id=self.spreadsheet_id)

    def has_header(self) -> bool:
        result = self.sheets.spreadsheets().values().get(
            spreadsheetId=self.spreadsheet_id,
            range=tab_range(self.tab, "A1:A1"),
        ).execute()
        return bool(result.get("values"))

    def ensure_header(self) -> bool:
        """Write the header row if the tab is empty. Returns True if written."""
        if self.has_header():
            return False
        self.sheets.spreadsheets().values().update(
            spreadsheetId=self.spreadsheet_id,
            range=tab_range(self.tab, "A1"),
            valueInputOption="RAW",
            body={"values": [headers()]},
        ).execute()
        logger.info("Wrote header row to '%s'", self.tab)
        return True

    def append(self, payload: CanonicalSubmissionPayload) -> str:
        """Append the brief as one row.

        Returns:
            The updated A1 range reported by the API

        Raises:
            SubmissionError: if any Sheets call fails
        """
        try:
            self.ensure_header()
            result = self.sheets.spreadsheets().values().append(
                spreadsheetId=self.spreadsheet_id,
                range=tab_range(self.tab),
                valueInputOption="RAW",
                body={"values": [payload.as_row()]},
            ).execute()
        except HttpError as e:
            raise SubmissionError(
                "Could not append the brief to the spreadsheet",
                service="sheets",
                details=str(e)
            ) from e

        updated = result.get("updates", {}).get("updatedRange", "")
        logger.debug("Appended brief row at %s", updated)
        return updated
