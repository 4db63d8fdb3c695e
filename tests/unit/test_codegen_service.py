"""Tests for integration code generation."""

import pytest

from src.modules.catalog.application.codegen_service import (
    SUPPORTED_LANGUAGES,
    CodeGenerationService,
    UnsupportedLanguageError,
)
from src.modules.catalog.application.formatter import format_snippet
from src.modules.catalog.application.query_service import CatalogQueryService
from src.modules.catalog.domain.exceptions import CatalogEntryNotFoundError
from src.modules.catalog.infrastructure.repositories import (
    InMemoryCatalogSnapshotRepository,
)


@pytest.fixture
def service(catalog_repository: InMemoryCatalogSnapshotRepository) -> CodeGenerationService:
    return CodeGenerationService(CatalogQueryService(catalog_repository))


def test_python_snippet_uses_api_key_placeholder(service: CodeGenerationService) -> None:
    snippet = service.generate("WeatherAPI", "python")

    assert snippet.language == "python"
    assert "url = 'https://www.weatherapi.com/api/resource'" in snippet.code
    assert "'X-API-Key': 'YOUR_API_KEY'," in snippet.code
    assert "requests.get(url, headers=headers, timeout=10)" in snippet.code
    assert any("YOUR_API_KEY" in note for note in snippet.notes)


def test_curl_snippet_has_header_flags(service: CodeGenerationService) -> None:
    snippet = service.generate("Twitter Lite", "CURL")

    assert snippet.language == "curl"
    assert '-H "X-Mashape-Key: YOUR_MASHAPE_KEY" \\' in snippet.code
    assert '-H "Content-Type: application/json" \\' in snippet.code
    assert any("does not support HTTPS" in note for note in snippet.notes)


def test_javascript_is_default_and_skips_auth_header_for_open_apis(
    service: CodeGenerationService,
) -> None:
    snippet = service.generate("cat facts")

    assert snippet.language == "javascript"
    assert snippet.entry.name == "Cat Facts"
    assert "'Content-Type': 'application/json'" in snippet.code
    assert "Authorization" not in snippet.code
    assert "X-API-Key" not in snippet.code
    assert any("backend proxy" in note for note in snippet.notes)


def test_unsupported_language_lists_supported(service: CodeGenerationService) -> None:
    with pytest.raises(UnsupportedLanguageError) as exc_info:
        service.generate("WeatherAPI", "ruby")

    for language in SUPPORTED_LANGUAGES:
        assert language in exc_info.value.message


def test_unknown_api(service: CodeGenerationService) -> None:
    with pytest.raises(CatalogEntryNotFoundError):
        service.generate("Nope", "python")


def test_formatted_snippet_wraps_code_block(service: CodeGenerationService) -> None:
    text = format_snippet(service.generate("Dog API", "javascript"))

    assert text.startswith("# Dog API integration code (javascript)")
    assert "```javascript\n" in text
    assert "## Usage notes" in text
