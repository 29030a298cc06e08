"""Project-wide constants."""

# -- PubMed / NCBI ----------------------------------------------------------
NCBI_BASE_URL: str = "https://eutils.ncbi.nlm.nih.gov/entrez/eutils"
PMC_IDCONV_URL: str = "https://www.ncbi.nlm.nih.gov/pmc/utils/idconv/v1.0/"
PUBMED_ARTICLE_URL: str = "https://pubmed.ncbi.nlm.nih.gov"

DEFAULT_TOOL: str = "clinical_literature"
DEFAULT_MAX_RESULTS: int = 5
DEFAULT_TIMEOUT: float = 10.0  # seconds

# -- Retry ------------------------------------------------------------------
DEFAULT_MAX_RETRIES: int = 2
OPEN_ACCESS_MAX_RETRIES: int = 1
BASE_RETRY_DELAY: float = 1.0  # seconds
RETRY_BACKOFF_FACTOR: float = 2.0

# -- Search filters ---------------------------------------------------------
EARLIEST_PUBLICATION_YEAR: int = 1900
FREE_FULL_TEXT_FILTER: str = "free full text[filter]"

# -- Formatting placeholders ------------------------------------------------
UNTITLED_ARTICLE: str = "Untitled"
UNKNOWN_AUTHORS: str = "Unknown Authors"
NO_ABSTRACT: str = "No abstract available."
