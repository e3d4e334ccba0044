"""
Typed Records

Row-to-record mapping for the client workbook tables. Each record builds
itself from a BoundRow, applying the coercion rules in coerce.py, and
serializes to the camelCase shape the dashboard frontend reads.

from_row() returns None when a row lacks its identity field; such rows are
dropped from output.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional

from src.mapping.coerce import (
    clean_string,
    coerce_bool,
    display_name_from_url,
    is_client_marker,
    parse_date_cell,
    pick_link,
    round2,
    safe_float,
    safe_int,
)
from src.sheets.schema import BoundRow

NOT_AVAILABLE = "N/A"

SOCIAL_FIELDS = ("facebook", "instagram", "tiktok", "youtube")


@dataclass
class AdsInfo:
    """Paid ads status of a clinic."""
    status: str = ""
    link: str = ""

    @property
    def running(self) -> bool:
        return self.status.lower() in {"yes", "running", "active", "true"}

    def to_dict(self) -> Dict[str, Any]:
        return {"status": self.status, "link": self.link, "running": self.running}


@dataclass
class ClientRecord:
    """One clinic from the "Client & Competitor Info" table."""
    name: str
    address: str = NOT_AVAILABLE
    city: str = NOT_AVAILABLE
    website: str = ""
    is_client: bool = False

    review_score: float = 0.0
    review_count: int = 0
    site_speed: float = 0.0
    keywords_number_one: int = 0
    backlinks: int = 0

    hours: str = ""
    ads: AdsInfo = field(default_factory=AdsInfo)
    social: Dict[str, str] = field(default_factory=dict)
    ai_notes: str = ""

    @classmethod
    def from_row(cls, row: BoundRow) -> Optional["ClientRecord"]:
        name = clean_string(row.get("name"))
        if not name:
            return None

        return cls(
            name=name,
            address=clean_string(row.get("address"), NOT_AVAILABLE),
            city=clean_string(row.get("city"), NOT_AVAILABLE),
            website=clean_string(row.get("website")),
            is_client=is_client_marker(row.get("account_type")),
            review_score=round2(safe_float(row.get("review_score"))),
            review_count=safe_int(row.get("review_count")),
            site_speed=round2(safe_float(row.get("site_speed"))),
            keywords_number_one=safe_int(row.get("keywords_number_one")),
            backlinks=safe_int(row.get("backlinks")),
            hours=clean_string(row.get("hours")),
            ads=AdsInfo(
                status=clean_string(row.get("ads_status")),
                link=pick_link(row.link("ads_status"), row.get("ads_link")),
            ),
            social={
                name: pick_link(row.link(name), row.get(name))
                for name in SOCIAL_FIELDS
            },
            ai_notes=clean_string(row.get("ai_notes")),
        )

    @property
    def display_name(self) -> str:
        return display_name_from_url(self.website) or self.name

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "displayName": self.display_name,
            "address": self.address,
            "city": self.city,
            "website": self.website,
            "isClient": self.is_client,
            "reviewScore": self.review_score,
            "reviewCount": self.review_count,
            "siteSpeed": self.site_speed,
            "keywordsNumberOne": self.keywords_number_one,
            "backlinks": self.backlinks,
            "hours": self.hours,
            "ads": self.ads.to_dict(),
            "social": dict(self.social),
            "aiNotes": self.ai_notes,
        }


@dataclass
class OnPageRecord:
    """Technical SEO health of one site ("On-Page Insights")."""
    name: str
    website: str = ""
    is_client: bool = False
    page_score: int = 0
    broken_links: int = 0
    missing_meta: int = 0
    missing_h1: int = 0
    duplicate_titles: int = 0
    site_speed: float = 0.0
    mobile_friendly: bool = False
    https: bool = False
    indexed_pages: int = 0

    @classmethod
    def from_row(cls, row: BoundRow) -> Optional["OnPageRecord"]:
        name = clean_string(row.get("name"))
        if not name:
            return None
        return cls(
            name=name,
            website=clean_string(row.get("website")),
            is_client=is_client_marker(row.get("account_type")),
            page_score=safe_int(row.get("page_score")),
            broken_links=safe_int(row.get("broken_links")),
            missing_meta=safe_int(row.get("missing_meta")),
            missing_h1=safe_int(row.get("missing_h1")),
            duplicate_titles=safe_int(row.get("duplicate_titles")),
            site_speed=round2(safe_float(row.get("site_speed"))),
            mobile_friendly=coerce_bool(row.get("mobile_friendly")),
            https=coerce_bool(row.get("https")),
            indexed_pages=safe_int(row.get("indexed_pages")),
        )

    @classmethod
    def empty(cls) -> "OnPageRecord":
        return cls(name="")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "website": self.website,
            "isClient": self.is_client,
            "pageScore": self.page_score,
            "brokenLinks": self.broken_links,
            "missingMetaDescriptions": self.missing_meta,
            "missingH1": self.missing_h1,
            "duplicateTitles": self.duplicate_titles,
            "siteSpeed": self.site_speed,
            "mobileFriendly": self.mobile_friendly,
            "https": self.https,
            "indexedPages": self.indexed_pages,
        }


@dataclass
class BacklinkRecord:
    """One backlink of a site."""
    url: str
    domain_rating: int = 0
    anchor_text: str = ""
    first_seen: Optional[date] = None
    link_type: str = ""
    is_new: bool = False
    is_lost: bool = False

    @classmethod
    def from_row(cls, row: BoundRow) -> Optional["BacklinkRecord"]:
        url = pick_link(row.link("url"), row.get("url")) or clean_string(row.get("url"))
        if not url:
            return None
        return cls(
            url=url,
            domain_rating=safe_int(row.get("domain_rating")),
            anchor_text=clean_string(row.get("anchor_text")),
            first_seen=parse_date_cell(row.get("first_seen")),
            link_type=clean_string(row.get("link_type")),
            is_new=coerce_bool(row.get("is_new")),
            is_lost=coerce_bool(row.get("is_lost")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "domainRating": self.domain_rating,
            "anchorText": self.anchor_text,
            "firstSeen": self.first_seen.isoformat() if self.first_seen else "",
            "linkType": self.link_type,
            "isNew": self.is_new,
            "isLost": self.is_lost,
        }


@dataclass
class KeywordRecord:
    """One ranking keyword of a site."""
    keyword: str
    position: int = 0
    previous_position: int = 0
    search_volume: int = 0
    cpc: float = 0.0
    traffic_value: float = 0.0
    url: str = ""
    is_new: bool = False
    is_up: bool = False
    is_down: bool = False
    is_lost: bool = False

    @classmethod
    def from_row(cls, row: BoundRow) -> Optional["KeywordRecord"]:
        keyword = clean_string(row.get("keyword"))
        if not keyword:
            return None
        return cls(
            keyword=keyword,
            position=safe_int(row.get("position")),
            previous_position=safe_int(row.get("previous_position")),
            search_volume=safe_int(row.get("search_volume")),
            cpc=round2(safe_float(row.get("cpc"))),
            traffic_value=round2(safe_float(row.get("traffic_value"))),
            url=pick_link(row.link("url"), row.get("url")),
            is_new=coerce_bool(row.get("is_new")),
            is_up=coerce_bool(row.get("is_up")),
            is_down=coerce_bool(row.get("is_down")),
            is_lost=coerce_bool(row.get("is_lost")),
        )

    @property
    def position_change(self) -> int:
        """Positive when the keyword moved up. Zero when either position is unknown."""
        if self.position <= 0 or self.previous_position <= 0:
            return 0
        return self.previous_position - self.position

    def to_dict(self) -> Dict[str, Any]:
        return {
            "keyword": self.keyword,
            "position": self.position,
            "previousPosition": self.previous_position,
            "positionChange": self.position_change,
            "searchVolume": self.search_volume,
            "cpc": self.cpc,
            "trafficValue": self.traffic_value,
            "url": self.url,
            "isNew": self.is_new,
            "isUp": self.is_up,
            "isDown": self.is_down,
            "isLost": self.is_lost,
        }


@dataclass
class BacklinkSummary:
    """Per-site row of "Backlinks Summary"."""
    website: str
    is_client: bool = False
    total_backlinks: int = 0
    referring_domains: int = 0
    new_backlinks: int = 0
    lost_backlinks: int = 0
    domain_rating: int = 0

    @classmethod
    def from_row(cls, row: BoundRow) -> Optional["BacklinkSummary"]:
        website = clean_string(row.get("website"))
        if not website:
            return None
        return cls(
            website=website,
            is_client=is_client_marker(row.get("account_type")),
            total_backlinks=safe_int(row.get("total_backlinks")),
            referring_domains=safe_int(row.get("referring_domains")),
            new_backlinks=safe_int(row.get("new_backlinks")),
            lost_backlinks=safe_int(row.get("lost_backlinks")),
            domain_rating=safe_int(row.get("domain_rating")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": display_name_from_url(self.website),
            "website": self.website,
            "isClient": self.is_client,
            "totalBacklinks": self.total_backlinks,
            "referringDomains": self.referring_domains,
            "newBacklinks": self.new_backlinks,
            "lostBacklinks": self.lost_backlinks,
            "domainRating": self.domain_rating,
        }


@dataclass
class KeywordSummary:
    """Per-site row of "Keywords Summary"."""
    website: str
    is_client: bool = False
    total_keywords: int = 0
    top_3: int = 0
    top_10: int = 0
    traffic_value: float = 0.0
    new_keywords: int = 0
    up: int = 0
    down: int = 0
    lost_keywords: int = 0

    @classmethod
    def from_row(cls, row: BoundRow) -> Optional["KeywordSummary"]:
        website = clean_string(row.get("website"))
        if not website:
            return None
        return cls(
            website=website,
            is_client=is_client_marker(row.get("account_type")),
            total_keywords=safe_int(row.get("total_keywords")),
            top_3=safe_int(row.get("top_3")),
            top_10=safe_int(row.get("top_10")),
            traffic_value=round2(safe_float(row.get("traffic_value"))),
            new_keywords=safe_int(row.get("new_keywords")),
            up=safe_int(row.get("up")),
            down=safe_int(row.get("down")),
            lost_keywords=safe_int(row.get("lost_keywords")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": display_name_from_url(self.website),
            "website": self.website,
            "isClient": self.is_client,
            "totalKeywords": self.total_keywords,
            "top3": self.top_3,
            "top10": self.top_10,
            "trafficValue": self.traffic_value,
            "newKeywords": self.new_keywords,
            "up": self.up,
            "down": self.down,
            "lostKeywords": self.lost_keywords,
        }


@dataclass
class SentimentRecord:
    """AI-generated review sentiment for one clinic."""
    name: str
    is_client: bool = False
    score: float = 0.0
    positive: List[str] = field(default_factory=list)
    negative: List[str] = field(default_factory=list)
    summary: str = ""

    @staticmethod
    def _themes(value: Any) -> List[str]:
        text = clean_string(value)
        return [t.strip() for t in text.split(",") if t.strip()] if text else []

    @classmethod
    def from_row(cls, row: BoundRow) -> Optional["SentimentRecord"]:
        name = clean_string(row.get("name"))
        if not name:
            return None
        return cls(
            name=name,
            is_client=is_client_marker(row.get("account_type")),
            score=round2(safe_float(row.get("score"))),
            positive=cls._themes(row.get("positive")),
            negative=cls._themes(row.get("negative")),
            summary=clean_string(row.get("summary")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "isClient": self.is_client,
            "score": self.score,
            "positiveThemes": list(self.positive),
            "negativeThemes": list(self.negative),
            "summary": self.summary,
        }


def map_rows(rows: List[BoundRow], record_type) -> List[Any]:
    """Map rows to records, dropping rows without identity."""
    records = []
    for row in rows:
        record = record_type.from_row(row)
        if record is not None:
            records.append(record)
    return records


def find_client(records: List[Any]) -> Optional[Any]:
    """First record flagged as the client, or None."""
    return next((r for r in records if getattr(r, "is_client", False)), None)
