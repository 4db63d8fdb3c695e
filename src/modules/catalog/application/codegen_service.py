"""Integration code snippets for catalog entries."""

from src.core.domain.exceptions import ValidationError
from src.core.infrastructure.templating.template_loader import render_template
from src.modules.catalog.application.formatter import get_auth_header
from src.modules.catalog.application.models import IntegrationSnippet
from src.modules.catalog.application.query_service import CatalogQueryService
from src.modules.catalog.domain.entities import CatalogEntry, CorsStatus

EXAMPLE_PATH = "/api/resource"

TEMPLATE_BY_LANGUAGE: dict[str, str] = {
    "javascript": "javascript.js.j2",
    "python": "python.py.j2",
    "curl": "curl.sh.j2",
}
SUPPORTED_LANGUAGES: tuple[str, ...] = tuple(TEMPLATE_BY_LANGUAGE)


class UnsupportedLanguageError(ValidationError):
    """Language tag outside SUPPORTED_LANGUAGES."""

    def __init__(self, language: str):
        self.language = language
        super().__init__(
            f"Unsupported language: {language}. "
            f"Supported languages: {', '.join(SUPPORTED_LANGUAGES)}"
        )


def _base_url(link: str) -> str:
    base = link if "http" in link else f"https://{link}"
    return base.rstrip("/")


def _request_headers(entry: CatalogEntry) -> list[tuple[str, str]]:
    headers: list[tuple[str, str]] = []
    auth_header = get_auth_header(entry.auth)
    if auth_header.header_name and auth_header.header_value:
        headers.append((auth_header.header_name, auth_header.header_value))
    headers.append(("Content-Type", "application/json"))
    return headers


class CodeGenerationService:
    """Render static request templates with credential placeholders."""

    def __init__(self, query_service: CatalogQueryService) -> None:
        self.query_service = query_service

    def generate(self, api_name: str, language: str = "javascript") -> IntegrationSnippet:
        """Build a snippet for the named API.

        Raises:
            CatalogEntryNotFoundError: no entry has that name.
            UnsupportedLanguageError: language is not a supported tag.
        """
        entry = self.query_service.details(api_name)
        normalized = language.strip().lower()
        template_name = TEMPLATE_BY_LANGUAGE.get(normalized)
        if template_name is None:
            raise UnsupportedLanguageError(language)

        code = render_template(
            template_name,
            api_name=entry.name,
            url=f"{_base_url(entry.link)}{EXAMPLE_PATH}",
            headers=_request_headers(entry),
        )
        return IntegrationSnippet(
            entry=entry,
            language=normalized,
            code=code,
            notes=self._notes(entry, normalized),
        )

    @staticmethod
    def _notes(entry: CatalogEntry, language: str) -> list[str]:
        tool = {
            "javascript": "the fetch API (with an axios alternative)",
            "python": "requests (with an async httpx alternative)",
            "curl": "the cURL command line tool",
        }[language]
        notes = [f"This example calls {entry.name} using {tool}."]

        placeholder = get_auth_header(entry.auth).placeholder
        if placeholder:
            notes.append(f"Replace '{placeholder}' with your real credentials before use.")

        notes.append(
            "The example uses a placeholder path; adjust the method, path and "
            "parameters to the provider's documentation."
        )
        if language == "curl":
            notes.append("-v prints the full request and response headers.")
        else:
            notes.append(
                "Keep credentials out of source code; load them from environment "
                "variables or a secrets store."
            )

        if entry.https:
            notes.append("This API supports HTTPS; always use the secure endpoint.")
        else:
            notes.append("This API does not support HTTPS; avoid sending secrets to it.")

        if language == "javascript":
            if entry.cors is CorsStatus.YES:
                notes.append("CORS is supported, so browsers can call it directly.")
            elif entry.cors is CorsStatus.NO:
                notes.append("CORS is not supported; call it through a backend proxy.")
            else:
                notes.append("CORS support is unknown; a backend proxy may be required.")
        return notes
