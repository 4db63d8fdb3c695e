"""Relevance scoring for project recommendations and alternative APIs.

两个入口共享同一打分算法：
- recommend_for_project: 项目类型 -> 关键词表（双向子串匹配）-> 打分
- find_alternatives: 功能描述分词 -> 打分

得分 = 条目检索文本（名称 + 描述 + 分类，小写）中命中的不同关键词数量。
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from loguru import logger

from src.core.config import settings
from src.core.domain.exceptions import ValidationError
from src.modules.catalog.application.models import RankedResult
from src.modules.catalog.domain.entities import ScoredEntry
from src.modules.catalog.domain.exceptions import CatalogEmptyError, NoMatchesError
from src.modules.catalog.domain.repository import CatalogSnapshotRepository

# Ordered (label, keywords) pairs; every label matching the query contributes.
PROJECT_KEYWORD_TABLE: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("天气应用", ("weather", "forecast", "climate", "temperature")),
    ("社交媒体", ("social", "media", "twitter", "facebook", "instagram")),
    ("电商", ("commerce", "product", "shop", "payment", "ecommerce")),
    ("新闻应用", ("news", "article", "media", "rss")),
    ("游戏", ("game", "score", "player", "entertainment")),
    ("教育", ("education", "learning", "school", "course", "academic")),
    ("健康", ("health", "fitness", "medical", "nutrition")),
    ("旅行", ("travel", "flight", "hotel", "booking", "destination")),
    ("金融", ("finance", "banking", "currency", "stock", "payment")),
    ("音乐", ("music", "audio", "song", "artist", "playlist")),
    ("视频", ("video", "streaming", "movie", "film", "tv")),
    ("地图", ("map", "location", "geocoding", "navigation", "place")),
    ("聊天机器人", ("chat", "bot", "ai", "message", "conversation")),
    ("数据分析", ("data", "analytics", "statistics", "visualization")),
    ("开发工具", ("development", "tool", "code", "programming")),
    ("安全", ("security", "authentication", "encryption", "protection")),
    ("weather app", ("weather", "forecast", "climate", "temperature")),
    ("social media", ("social", "media", "twitter", "facebook", "instagram")),
    ("e-commerce", ("commerce", "product", "shop", "payment", "ecommerce")),
    ("news app", ("news", "article", "media", "rss")),
    ("game", ("game", "score", "player", "entertainment")),
    ("education", ("education", "learning", "school", "course", "academic")),
    ("health", ("health", "fitness", "medical", "nutrition")),
    ("travel", ("travel", "flight", "hotel", "booking", "destination")),
    ("finance", ("finance", "banking", "currency", "stock", "payment")),
    ("music", ("music", "audio", "song", "artist", "playlist")),
    ("video", ("video", "streaming", "movie", "film", "tv")),
    ("map", ("map", "location", "geocoding", "navigation", "place")),
    ("chatbot", ("chat", "bot", "ai", "message", "conversation")),
    ("data analysis", ("data", "analytics", "statistics", "visualization")),
    ("developer tools", ("development", "tool", "code", "programming")),
    ("security", ("security", "authentication", "encryption", "protection")),
)

MIN_TOKEN_LENGTH = 3


def _unique(values: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    result: list[str] = []
    for value in values:
        normalized = value.strip().lower()
        if normalized and normalized not in seen:
            seen.add(normalized)
            result.append(normalized)
    return result


def resolve_project_keywords(
    project_type: str,
    extra_terms: Sequence[str] = (),
    table: Sequence[tuple[str, Sequence[str]]] = PROJECT_KEYWORD_TABLE,
) -> list[str]:
    """Union of the keyword sets whose label contains, or is contained in, the query.

    Falls back to the project type itself when neither the table nor the
    extra terms yield a keyword.
    """
    query = project_type.strip().lower()
    matched: list[str] = []
    # 空查询被每个标签包含，因此匹配整张表
    for label, keywords in table:
        label_lower = label.lower()
        if query in label_lower or label_lower in query:
            matched.extend(keywords)

    keywords = _unique([*matched, *extra_terms])
    if not keywords:
        keywords = _unique([project_type])
    return keywords


def tokenize_functionality(text: str) -> list[str]:
    """Distinct lowercase whitespace tokens longer than two characters."""
    return _unique(token for token in text.split() if len(token) >= MIN_TOKEN_LENGTH)


class RecommendationService:
    """Rank catalog entries by how many distinct keywords they contain."""

    def __init__(self, repository: CatalogSnapshotRepository) -> None:
        self.repository = repository
        self._logger = logger.bind(service="RecommendationService")

    def recommend_for_project(
        self,
        project_type: str,
        extra_terms: Sequence[str] = (),
        limit: int = settings.RECOMMEND_DEFAULT_LIMIT,
    ) -> RankedResult:
        keywords = resolve_project_keywords(project_type, extra_terms)
        self._logger.debug(f"Resolved keywords for {project_type!r}: {keywords}")
        items = self.rank(keywords, limit)
        if not items:
            raise NoMatchesError(
                f'No API recommendations found for "{project_type}". '
                "Try a more specific project type or requirements."
            )
        return RankedResult(query=project_type, keywords=keywords, items=items)

    def find_alternatives(
        self,
        functionality: str,
        limit: int = settings.RECOMMEND_DEFAULT_LIMIT,
    ) -> RankedResult:
        keywords = tokenize_functionality(functionality)
        items = self.rank(keywords, limit)
        if not items:
            raise NoMatchesError(
                f'No alternative APIs found for "{functionality}". '
                "Try describing the functionality differently."
            )
        return RankedResult(query=functionality, keywords=keywords, items=items)

    def rank(self, keywords: Sequence[str], limit: int) -> list[ScoredEntry]:
        """Score every entry, drop zero scores, stable-sort descending, cut to limit."""
        if limit < 1:
            raise ValidationError(f"limit must be a positive integer, got {limit}")
        catalog = self.repository.get().catalog
        if catalog.is_empty:
            raise CatalogEmptyError()

        needles = _unique(keywords)
        scored: list[ScoredEntry] = []
        for entry in catalog.iter_entries():
            text = entry.search_text
            score = sum(1 for needle in needles if needle in text)
            if score > 0:
                scored.append(ScoredEntry(entry=entry, score=score))

        scored.sort(key=lambda item: item.score, reverse=True)
        return scored[:limit]
