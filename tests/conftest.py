"""
Pytest Configuration and Shared Fixtures

Provides in-memory workbooks for the client report and service rollup tests.
"""

import pytest
from datetime import date
from typing import Any, Dict, List

from src.cache.response_cache import InMemoryResponseCache
from src.sheets.store import InMemoryRowStore
from src.sheets.tables import GEOGRID_COMPETITORS


CLIENT_WORKBOOK_ID = "client-workbook-1"
SERVICES_WORKBOOK_ID = "services-workbook"


# ============================================================================
# Client Workbook
# ============================================================================

ON_PAGE_HEADER = [
    "Account Type", "Clinic Name", "Website", "Page Score", "Broken Links",
    "Missing Meta Descriptions", "Missing H1", "Duplicate Titles", "Site Speed",
    "Mobile Friendly", "HTTPS", "Indexed Pages",
]

CLIENT_INFO_HEADER = [
    "Account Type", "Clinic Name", "Address", "City", "Website", "Review Score",
    "Review Count", "Site Speed", "#1 Keywords", "Backlinks", "Hours", "Ads Status",
    "Ads Link", "Facebook", "Instagram", "TikTok", "YouTube", "AI Notes",
]

BACKLINKS_HEADER = [
    "Website", "Backlink URL", "Domain Rating", "Anchor Text", "First Seen",
    "Link Type", "Is New", "Is Lost",
]

KEYWORDS_HEADER = [
    "Website", "Keyword", "Position", "Previous Position", "Search Volume", "CPC",
    "Traffic Value", "URL", "Is New", "Is Up", "Is Down", "Is Lost",
]


def geogrid_header() -> List[str]:
    header = ["Keyword", "Run Date"]
    for n in range(1, GEOGRID_COMPETITORS + 1):
        header.extend([
            f"Competitor {n} Name", f"Competitor {n} Domain", f"Competitor {n} Rank",
            f"Competitor {n} Top 5", f"Competitor {n} Top 10",
        ])
    return header


def geogrid_row(keyword: str, run_date: Any, competitors: List[tuple]) -> List[Any]:
    row = [keyword, run_date]
    for n in range(GEOGRID_COMPETITORS):
        if n < len(competitors):
            row.extend(list(competitors[n]))
        else:
            row.extend(["", "", "", "", ""])
    return row


@pytest.fixture
def client_tables() -> Dict[str, List[List[Any]]]:
    """A complete client workbook: one client and one competitor everywhere."""
    return {
        "On-Page Insights": [
            ON_PAGE_HEADER,
            ["Client", "Glow Med Spa", "https://www.glowmedspa.com", "85", "2", "4", "1", "0",
             "2.4", "TRUE", "TRUE", "120"],
            ["Competitor", "Radiance Clinic", "https://radianceclinic.com", 72, 5, 9, 3, 2,
             3.1, "FALSE", True, 80],
        ],
        "Client & Competitor Info": [
            CLIENT_INFO_HEADER,
            ["Client", "Glow Med Spa", "12 Ocean Dr", "Miami", "https://www.glowmedspa.com",
             "4.8", "1,204", "2.4", "17", "340", "9am-6pm", "Running", "",
             "https://facebook.com/glow", "", "", "", "Strong review velocity."],
            ["competitor", "Radiance Clinic", "", "", "https://radianceclinic.com",
             4.2, 310, 3.1, 6, 120, "", "Not Running", "", "", "", "", "", ""],
            ["Competitor", "", "No Name Street", "Miami", "https://nameless.com",
             3.0, 10, 0, 0, 0, "", "", "", "", "", "", "", ""],
        ],
        "GBP Insights": [
            ["Date", "Calls", "Website Clicks", "Direction Requests", "Profile Views",
             "Search Views", "Maps Views"],
            ["February 2024", 50, 80, 20, 900, 600, 300],
            ["March 2024", 65, 70, 25, 1000, 650, 350],
        ],
        "Backlinks - Client": [
            BACKLINKS_HEADER,
            ["https://www.glowmedspa.com", "https://blog.example.com/best-spas", 55,
             "best med spa", "2024-02-14", "dofollow", "TRUE", "FALSE"],
            ["https://www.glowmedspa.com", "", 10, "", "", "", "", ""],
        ],
        "Backlinks - Competitor 1": [
            BACKLINKS_HEADER,
            ["https://radianceclinic.com/about", "https://news.example.org/clinics", 40,
             "radiance", "March 3, 2024", "nofollow", "false", "true"],
        ],
        "Backlinks Summary": [
            ["Account Type", "Website", "Total Backlinks", "Referring Domains", "New Backlinks",
             "Lost Backlinks", "Domain Rating"],
            ["Client", "https://www.glowmedspa.com", 120, 40, 8, 2, 30],
            ["Competitor", "https://radianceclinic.com", 300, 90, 12, 5, 41],
        ],
        "Backlinks Archive": [
            ["Date", "Total Backlinks", "Referring Domains", "Domain Rating"],
            ["February 2024", 100, 35, 29],
            ["March 2024", 120, 40, 30],
            ["not a date", 1, 1, 1],
            ["January 2024", 90, 30, 28],
        ],
        "Keywords - Client": [
            KEYWORDS_HEADER,
            ["https://www.glowmedspa.com", "botox miami", 3, 5, "2,400", "$4.10", "1,200.50",
             "https://www.glowmedspa.com/botox", "FALSE", "TRUE", "FALSE", "FALSE"],
            ["https://www.glowmedspa.com", "lip filler miami", 8, 0, 900, 3.5, 210,
             "", "TRUE", "FALSE", "FALSE", "FALSE"],
        ],
        "Keywords Summary": [
            ["Account Type", "Website", "Total Keywords", "Top 3", "Top 10", "Traffic Value",
             "New Keywords", "Up", "Down", "Lost Keywords"],
            ["Client", "https://www.glowmedspa.com", 210, 12, 40, "$3,400", 5, 9, 3, 1],
        ],
        "Keywords Archive": [
            ["Date", "Total Keywords", "Top 3", "Top 10", "Traffic Value"],
            ["March 2024", 210, 12, 40, 3400.5],
            ["February 2024", 200, 10, 38, 3000],
        ],
        "GeoGrid": [
            geogrid_header(),
            geogrid_row("Botox Miami", "2024-02-01", [("Glow Med Spa", "glowmedspa.com", 3, 20, 40)]),
            geogrid_row(" botox miami ", "2024-03-01", [
                ("Glow Med Spa", "glowmedspa.com", 2, 25, 45),
                ("Radiance Clinic", "radianceclinic.com", 4, 15, 30),
            ]),
            geogrid_row("lip filler", "garbage", [("Radiance Clinic", "radianceclinic.com", 1, 30, 49)]),
        ],
        "Census": [
            ["Metric", "Value"],
            ["Population", "442,241"],
            ["Median Income", "$51,347"],
            ["Largest Age Group", "25-34"],
        ],
        "AI Sentiment": [
            ["Account Type", "Clinic Name", "Sentiment Score", "Positive Themes",
             "Negative Themes", "Summary"],
            ["Client", "Glow Med Spa", "0.82", "friendly staff, results", "wait times",
             "Mostly positive."],
        ],
        "Config": [
            ["Setting", "Value"],
            ["Report Webhook", "https://hooks.example.com/report"],
            ["Slack Webhook", "not a url"],
            ["Client Name", "https://glowmedspa.com"],
        ],
    }


@pytest.fixture
def client_links() -> Dict[str, List[List[Any]]]:
    """Rich-text links: the client's ads status cell carries its link."""
    info_links = [[None] * len(CLIENT_INFO_HEADER) for _ in range(4)]
    info_links[1][CLIENT_INFO_HEADER.index("Ads Status")] = "https://ads.example.com/glow"
    return {"Client & Competitor Info": info_links}


@pytest.fixture
def row_store(client_tables, client_links) -> InMemoryRowStore:
    store = InMemoryRowStore()
    store.add(CLIENT_WORKBOOK_ID, client_tables, client_links)
    return store


@pytest.fixture
def client_workbook(row_store):
    return row_store.open(CLIENT_WORKBOOK_ID)


@pytest.fixture
def memory_cache() -> InMemoryResponseCache:
    return InMemoryResponseCache(namespace="test")


# ============================================================================
# Services Workbook
# ============================================================================

SERVICES_HEADER = [
    "Service", "Keyword", "City", "State", "Country", "Competition", "CPC",
    "January 2024", "February 2024", "March 2024",
]


@pytest.fixture
def services_tables() -> Dict[str, List[List[Any]]]:
    """
    Services workbook. March 2024 is not filled in yet, so February is the
    current month and January the previous one.
    """
    return {
        "Services - USA": [
            SERVICES_HEADER,
            ["Botox", "botox near me", "", "", "USA", 0.8, "$5.00", 9000, 10000, ""],
            ["Dermal Fillers", "fillers near me", "", "", "USA", 0.6, 4, 6000, 5000, "-"],
            ["Semaglutide", "semaglutide clinic", "", "", "usa", 0.4, 6, 2000, 5000, ""],
            ["Botox", "botox canada", "", "", "Canada", 0.8, 5, 100, 100, ""],
        ],
        "Services - Canada": [
            SERVICES_HEADER,
            ["Botox", "botox toronto", "", "", "Canada", 0.7, 3, 800, 900, ""],
        ],
        "Services - States": [
            SERVICES_HEADER,
            ["Botox", "botox alabama", "", "Alabama", "USA", 0.5, 3, 300, 400, ""],
            ["Botox", "botox ontario", "", "Ontario", "Canada", 0.5, 3, 200, 250, ""],
            ["Microneedling", "microneedling ontario", "", "Ontario", "Canada", "-", 0, 50, 40, ""],
            ["Botox", "botox florida", "", "FL", "USA", 0.5, 3, 700, 650, ""],
            ["Botox", "botox new jersey", "", "New-Jersey", "USA", 0.5, 3, 150, 150, ""],
        ],
        "Services - Cities": [
            SERVICES_HEADER,
            ["Botox", "botox miami", "Miami", "FL", "USA", 0.5, "$3.20", 400, 500, ""],
            ["Botox", "botox tampa", "Tampa", "FL", "USA", 0.4, 2.8, 300, 200, ""],
            ["Lip Fillers", "lip filler miami", "Miami", "Florida", "USA", 0.3, 2, 100, 100, ""],
            ["Botox", "botox new york", "New York", "NY", "USA", 0.9, 6, 1000, 1200, ""],
            ["Botox", "botox new york city", "new york", "", "USA", 0.9, 6, 100, 100, ""],
            ["Botox", "botox miami ohio", "Miami", "OH", "USA", 0.2, 1, 10, 10, ""],
            ["Botox", "botox tampa dup", "tampa", "fl", "usa", 0.4, 2.8, 1, 1, ""],
        ],
    }


@pytest.fixture
def services_store(services_tables) -> InMemoryRowStore:
    store = InMemoryRowStore()
    store.add(SERVICES_WORKBOOK_ID, services_tables)
    return store


@pytest.fixture
def today() -> date:
    return date(2024, 4, 15)
