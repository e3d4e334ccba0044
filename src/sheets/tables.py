"""
Workbook Table Declarations

Schemas for every table the service reads. Header text is what the
workbooks carry; aliases cover older exports.
"""

from typing import List, Tuple

from src.sheets.schema import Field, TableSchema


# =============================================================================
# CLIENT WORKBOOK
# =============================================================================

ON_PAGE_INSIGHTS = TableSchema(
    table="On-Page Insights",
    fields=(
        Field("account_type", "Account Type", aliases=("Type",)),
        Field("name", "Clinic Name", aliases=("Name", "Business Name")),
        Field("website", "Website", aliases=("URL",)),
        Field("page_score", "Page Score", aliases=("On-Page Score",)),
        Field("broken_links", "Broken Links"),
        Field("missing_meta", "Missing Meta Descriptions", aliases=("Missing Meta",)),
        Field("missing_h1", "Missing H1"),
        Field("duplicate_titles", "Duplicate Titles"),
        Field("site_speed", "Site Speed", aliases=("Site Speed (s)", "Load Time")),
        Field("mobile_friendly", "Mobile Friendly", required=False),
        Field("https", "HTTPS", required=False),
        Field("indexed_pages", "Indexed Pages", required=False),
    ),
)

CLIENT_INFO = TableSchema(
    table="Client & Competitor Info",
    fields=(
        Field("account_type", "Account Type", aliases=("Type",)),
        Field("name", "Clinic Name", aliases=("Name", "Business Name")),
        Field("address", "Address"),
        Field("city", "City"),
        Field("website", "Website", aliases=("URL",)),
        Field("review_score", "Review Score", aliases=("Rating",)),
        Field("review_count", "Review Count", aliases=("Reviews",)),
        Field("site_speed", "Site Speed", aliases=("Site Speed (s)",)),
        Field("keywords_number_one", "#1 Keywords", aliases=("Keywords #1", "Position 1 Keywords")),
        Field("backlinks", "Backlinks"),
        Field("hours", "Hours", required=False),
        Field("ads_status", "Ads Status", aliases=("Ads",)),
        Field("ads_link", "Ads Link", required=False),
        Field("facebook", "Facebook", required=False),
        Field("instagram", "Instagram", required=False),
        Field("tiktok", "TikTok", required=False),
        Field("youtube", "YouTube", required=False),
        Field("ai_notes", "AI Notes", aliases=("Notes",), required=False),
    ),
)

GBP_INSIGHTS = TableSchema(
    table="GBP Insights",
    fields=(
        Field("date", "Date", aliases=("Month",)),
        Field("calls", "Calls"),
        Field("website_clicks", "Website Clicks"),
        Field("direction_requests", "Direction Requests", aliases=("Directions",)),
        Field("profile_views", "Profile Views"),
        Field("search_views", "Search Views", required=False),
        Field("maps_views", "Maps Views", required=False),
    ),
)

BACKLINKS = TableSchema(
    table="Backlinks - Client",
    fields=(
        Field("website", "Website"),
        Field("url", "Backlink URL", aliases=("Source URL",)),
        Field("domain_rating", "Domain Rating", aliases=("DR",)),
        Field("anchor_text", "Anchor Text", aliases=("Anchor",)),
        Field("first_seen", "First Seen"),
        Field("link_type", "Link Type", required=False),
        Field("is_new", "Is New", aliases=("New",)),
        Field("is_lost", "Is Lost", aliases=("Lost",)),
    ),
)

BACKLINKS_SUMMARY = TableSchema(
    table="Backlinks Summary",
    fields=(
        Field("account_type", "Account Type", aliases=("Type",)),
        Field("website", "Website"),
        Field("total_backlinks", "Total Backlinks", aliases=("Backlinks",)),
        Field("referring_domains", "Referring Domains"),
        Field("new_backlinks", "New Backlinks"),
        Field("lost_backlinks", "Lost Backlinks"),
        Field("domain_rating", "Domain Rating", aliases=("DR",)),
    ),
)

BACKLINKS_ARCHIVE = TableSchema(
    table="Backlinks Archive",
    fields=(
        Field("date", "Date", aliases=("Crawl Date",)),
        Field("total_backlinks", "Total Backlinks", aliases=("Backlinks",)),
        Field("referring_domains", "Referring Domains"),
        Field("domain_rating", "Domain Rating", aliases=("DR",), required=False),
    ),
)

KEYWORDS = TableSchema(
    table="Keywords - Client",
    fields=(
        Field("website", "Website"),
        Field("keyword", "Keyword"),
        Field("position", "Position", aliases=("Rank",)),
        Field("previous_position", "Previous Position", aliases=("Prev Position",)),
        Field("search_volume", "Search Volume", aliases=("Volume",)),
        Field("cpc", "CPC"),
        Field("traffic_value", "Traffic Value", aliases=("Est. Traffic Value",)),
        Field("url", "URL", required=False),
        Field("is_new", "Is New", aliases=("New",)),
        Field("is_up", "Is Up", aliases=("Up",)),
        Field("is_down", "Is Down", aliases=("Down",)),
        Field("is_lost", "Is Lost", aliases=("Lost",)),
    ),
)

KEYWORDS_SUMMARY = TableSchema(
    table="Keywords Summary",
    fields=(
        Field("account_type", "Account Type", aliases=("Type",)),
        Field("website", "Website"),
        Field("total_keywords", "Total Keywords", aliases=("Keywords",)),
        Field("top_3", "Top 3"),
        Field("top_10", "Top 10"),
        Field("traffic_value", "Traffic Value", aliases=("Est. Traffic Value",)),
        Field("new_keywords", "New Keywords", aliases=("New",)),
        Field("up", "Up"),
        Field("down", "Down"),
        Field("lost_keywords", "Lost Keywords", aliases=("Lost",)),
    ),
)

KEYWORDS_ARCHIVE = TableSchema(
    table="Keywords Archive",
    fields=(
        Field("date", "Date", aliases=("Crawl Date",)),
        Field("total_keywords", "Total Keywords", aliases=("Keywords",)),
        Field("top_3", "Top 3"),
        Field("top_10", "Top 10"),
        Field("traffic_value", "Traffic Value", aliases=("Est. Traffic Value",), required=False),
    ),
)

GEOGRID_COMPETITORS = 5


def _geogrid_fields() -> Tuple[Field, ...]:
    fields = [
        Field("keyword", "Keyword"),
        Field("run_date", "Run Date", aliases=("Date",)),
    ]
    for n in range(1, GEOGRID_COMPETITORS + 1):
        # Only the first competitor block is mandatory
        required = n == 1
        fields.extend([
            Field(f"competitor_{n}_name", f"Competitor {n} Name", required=required),
            Field(f"competitor_{n}_domain", f"Competitor {n} Domain", required=required),
            Field(f"competitor_{n}_rank", f"Competitor {n} Rank", required=required),
            Field(f"competitor_{n}_top5", f"Competitor {n} Top 5", required=required),
            Field(f"competitor_{n}_top10", f"Competitor {n} Top 10", required=required),
        ])
    return tuple(fields)


GEOGRID = TableSchema(table="GeoGrid", fields=_geogrid_fields())

CENSUS = TableSchema(
    table="Census",
    fields=(
        Field("metric", "Metric"),
        Field("value", "Value"),
    ),
)

AI_SENTIMENT = TableSchema(
    table="AI Sentiment",
    fields=(
        Field("account_type", "Account Type", aliases=("Type",)),
        Field("name", "Clinic Name", aliases=("Name",)),
        Field("score", "Sentiment Score", aliases=("Score",)),
        Field("positive", "Positive Themes"),
        Field("negative", "Negative Themes"),
        Field("summary", "Summary", required=False),
    ),
)

CONFIG = TableSchema(
    table="Config",
    fields=(
        Field("setting", "Setting", aliases=("Key",)),
        Field("value", "Value"),
    ),
)

# Parallel per-site tables: (role, table name)
SITE_ROLES: List[Tuple[str, str]] = [
    ("client", "Client"),
    ("competitor1", "Competitor 1"),
    ("competitor2", "Competitor 2"),
    ("competitor3", "Competitor 3"),
    ("competitor4", "Competitor 4"),
]


def backlink_tables() -> List[Tuple[str, TableSchema]]:
    return [(role, BACKLINKS.with_table(f"Backlinks - {suffix}")) for role, suffix in SITE_ROLES]


def keyword_tables() -> List[Tuple[str, TableSchema]]:
    return [(role, KEYWORDS.with_table(f"Keywords - {suffix}")) for role, suffix in SITE_ROLES]


# =============================================================================
# SERVICES WORKBOOK
# =============================================================================

SERVICES_USA = "Services - USA"
SERVICES_CANADA = "Services - Canada"
SERVICES_STATES = "Services - States"
SERVICES_CITIES = "Services - Cities"

SERVICES = TableSchema(
    table=SERVICES_USA,
    fields=(
        Field("service", "Service"),
        Field("keyword", "Keyword"),
        Field("city", "City", required=False),
        Field("state", "State", aliases=("Province", "State/Province"), required=False),
        Field("country", "Country", required=False),
        Field("competition", "Competition", aliases=("Competition Index",)),
        Field("cpc", "CPC"),
    ),
)


def services_table(table: str) -> TableSchema:
    return SERVICES.with_table(table)
