"""Human-readable rendering of catalog query results."""

from dataclasses import dataclass

from src.modules.catalog.application.models import (
    AuthKindSummary,
    CatalogStatistics,
    CategoryResult,
    CategorySummary,
    FilterResult,
    IntegrationSnippet,
    RankedResult,
    RecentEntriesResult,
)
from src.modules.catalog.domain.entities import AuthKind, CatalogEntry

EXAMPLE_ENDPOINT = "https://api-endpoint.com/resource"


@dataclass(frozen=True)
class AuthHeader:
    """Credential placeholder for one auth kind."""

    setup: str
    header_name: str | None = None
    header_value: str | None = None

    @property
    def header(self) -> str:
        if not self.header_name:
            return ""
        return f"{self.header_name}: {self.header_value}"

    @property
    def placeholder(self) -> str | None:
        """The YOUR_* token a user has to replace, if any."""
        if not self.header_value:
            return None
        return self.header_value.split()[-1]

    @property
    def curl(self) -> str:
        if not self.header_name:
            return f"curl {EXAMPLE_ENDPOINT}"
        return f'curl -H "{self.header}" {EXAMPLE_ENDPOINT}'


AUTH_HEADERS: dict[AuthKind, AuthHeader] = {
    AuthKind.API_KEY: AuthHeader(
        setup=(
            "Requires an API key. Register an account and create a key in the "
            "provider's developer console."
        ),
        header_name="X-API-Key",
        header_value="YOUR_API_KEY",
    ),
    AuthKind.OAUTH: AuthHeader(
        setup=(
            "Requires OAuth. Follow the provider's OAuth flow to obtain an "
            "access token."
        ),
        header_name="Authorization",
        header_value="Bearer YOUR_ACCESS_TOKEN",
    ),
    AuthKind.PROXY_KEY: AuthHeader(
        setup=(
            "Requires a Mashape/RapidAPI key. Subscribe to this API on the "
            "RapidAPI marketplace."
        ),
        header_name="X-Mashape-Key",
        header_value="YOUR_MASHAPE_KEY",
    ),
    AuthKind.USER_AGENT: AuthHeader(
        setup="Requires a User-Agent header that identifies your application.",
        header_name="User-Agent",
        header_value="YOUR_APP_NAME",
    ),
    AuthKind.NONE: AuthHeader(setup="No authentication required."),
}


def get_auth_header(auth: AuthKind) -> AuthHeader:
    return AUTH_HEADERS[auth]


def _yes_no(value: bool) -> str:
    return "yes" if value else "no"


def format_entry(entry: CatalogEntry) -> str:
    return (
        f"📌 {entry.name}\n"
        f"📝 Description: {entry.description}\n"
        f"🔑 Auth: {entry.auth.value}\n"
        f"🔒 HTTPS: {_yes_no(entry.https)}\n"
        f"🌐 CORS: {entry.cors.value}\n"
        f"🔗 Link: {entry.link}\n"
        f"📂 Category: {entry.category}"
    )


def format_entries(entries: list[CatalogEntry]) -> str:
    return "\n\n".join(format_entry(entry) for entry in entries)


def format_details(entry: CatalogEntry) -> str:
    details = (
        f"# {entry.name}\n\n"
        "## Overview\n\n"
        f"- **Description**: {entry.description}\n"
        f"- **Category**: {entry.category}\n"
        f"- **Link**: {entry.link}\n\n"
        "## Technical details\n\n"
        f"- **Auth**: {entry.auth.value}\n"
        f"- **HTTPS**: {_yes_no(entry.https)}\n"
        f"- **CORS**: {entry.cors.value}\n\n"
    )
    if entry.auth is not AuthKind.NONE:
        auth_header = get_auth_header(entry.auth)
        details += (
            "## Authentication\n\n"
            f"{auth_header.setup}\n\n"
            "## Example request\n\n"
            f"```bash\n{auth_header.curl}\n```\n\n"
        )
    return details


def format_category_result(result: CategoryResult) -> str:
    if result.exact:
        header = (
            f"APIs in category {result.category} "
            f"(showing up to {result.limit} of {result.total}):"
        )
    else:
        header = f'Found category "{result.category}" with {result.total} APIs:'
    return f"{header}\n\n{format_entries(result.entries)}"


def format_filter_result(result: FilterResult) -> str:
    return (
        f"APIs with {result.description} ({len(result.entries)} found, "
        f"limit {result.limit}):\n\n{format_entries(result.entries)}"
    )


def format_category_list(categories: list[CategorySummary]) -> str:
    lines = "\n".join(f"{item.name} ({item.count} APIs)" for item in categories)
    return f"Available API categories ({len(categories)} total):\n\n{lines}"


def format_random_entry(entry: CatalogEntry) -> str:
    return f"Random API pick:\n\n{format_details(entry)}"


def format_statistics(stats: CatalogStatistics) -> str:
    auth_lines = "\n".join(
        f"{share.label}: {share.count} ({share.percentage:.1f}%)"
        for share in stats.auth_distribution
    )
    cors_lines = "\n".join(
        f"{share.label}: {share.count} ({share.percentage:.1f}%)"
        for share in stats.cors_distribution
    )
    return (
        "API statistics:\n\n"
        f"Total categories: {stats.total_categories}\n"
        f"Total APIs: {stats.total_entries}\n\n"
        f"Auth types:\n{auth_lines}\n\n"
        f"HTTPS support: {stats.https_count} ({stats.https_percentage:.1f}%)\n\n"
        f"CORS support:\n{cors_lines}"
    )


def format_auth_analysis(summaries: list[AuthKindSummary]) -> str:
    text = "API authentication analysis:\n\n"
    for summary in summaries:
        text += f"{summary.auth.value}: {summary.count} APIs ({summary.percentage:.1f}%)\n"
        text += f"Examples: {', '.join(summary.examples)}\n\n"
    return text


def format_ranked_result(result: RankedResult, *, heading: str) -> str:
    blocks = [
        f"### {index}. {item.entry.name}\n"
        f"**Relevance**: {item.score}\n"
        f"**Description**: {item.entry.description}\n"
        f"**Auth**: {item.entry.auth.value}\n"
        f"**Link**: {item.entry.link}\n"
        for index, item in enumerate(result.items, start=1)
    ]
    return f"{heading}\n\n" + "\n".join(blocks)


def format_recent_entries(result: RecentEntriesResult) -> str:
    lines = "\n".join(
        f"{index}. {entry.name} - {entry.description}"
        for index, entry in enumerate(result.entries, start=1)
    )
    note = " (sampled, the catalog has no added-at dates)" if result.simulated else ""
    return f"APIs added in the last {result.days} days{note}:\n\n{lines}"


def format_snippet(snippet: IntegrationSnippet) -> str:
    entry = snippet.entry
    notes = "\n".join(f"{index}. {note}" for index, note in enumerate(snippet.notes, start=1))
    return (
        f"# {entry.name} integration code ({snippet.language})\n\n"
        "## API info\n\n"
        f"- **Description**: {entry.description}\n"
        f"- **Auth**: {entry.auth.value}\n"
        f"- **HTTPS**: {_yes_no(entry.https)}\n"
        f"- **CORS**: {entry.cors.value}\n"
        f"- **Link**: {entry.link}\n\n"
        "## Code\n\n"
        f"```{snippet.language}\n{snippet.code}\n```\n\n"
        f"## Usage notes\n\n{notes}\n"
    )
