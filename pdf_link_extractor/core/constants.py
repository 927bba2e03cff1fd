from enum import Enum


class ExportFiles:
    CSV_NAME = "extracted_links.csv"
    CSV_MIME = "text/csv"
    CSV_HEADER = ("Page", "URL")
    XLSX_NAME = "extracted_links.xlsx"
    XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    XLSX_SHEET = "Links"


class TitleStatus(str, Enum):
    PENDING = "pending"
    SUCCESS = "success"
    FAILURE = "failure"


# Status recorded when the lookup call itself fails locally
LOCAL_FAILURE_STATUS = 500
FALLBACK_FETCH_ERROR = "Could not fetch the title"

EXTRACTION_FAILED_MESSAGE = "An error occurred while extracting links. Please try again."

# Schemes a link annotation URL may carry to count as a direct, safe URL
SAFE_URL_SCHEMES: frozenset[str] = frozenset({"http", "https", "ftp", "mailto", "tel"})
