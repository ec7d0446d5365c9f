"""
Pytest configuration and fixtures
"""

import json
import pytest
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock
from typing import Any, Dict, List, Optional

# Add src to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from config.settings import Settings, PathSettings, TranslatorSettings
from locales.locale_store import LocaleStore
from services.translation_service import TranslationService


SOURCE_CATALOG = {
    "_meta": {"language": "English"},
    "common": {
        "save": "Save",
        "greeting": "Hello {name}",
    },
    "items": {
        "count": "You have {count} items",
        "kind": {
            "book": "Book",
            "tool": "Tool",
        },
    },
}


def write_json(path: Path, data: Any):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, ensure_ascii=False, indent="\t") + "\n", encoding="utf-8")


def read_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def make_response(status: int = 200, json_data: Optional[Dict[str, Any]] = None, text: str = "") -> MagicMock:
    """Create a mock aiohttp response."""
    response = MagicMock()
    response.status = status
    response.json = AsyncMock(return_value=json_data)
    response.text = AsyncMock(return_value=text)
    return response


def make_session(*responses: MagicMock) -> MagicMock:
    """Create a mock aiohttp session whose post() yields the given responses in order."""
    contexts = []
    for response in responses:
        context = MagicMock()
        context.__aenter__ = AsyncMock(return_value=response)
        context.__aexit__ = AsyncMock(return_value=False)
        contexts.append(context)

    session = MagicMock()
    session.closed = False
    session.post = MagicMock(side_effect=contexts)
    return session


def translations_json(*texts: str) -> Dict[str, List[Dict[str, str]]]:
    return {"translations": [{"detected_source_language": "EN", "text": text} for text in texts]}


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Create a temporary project with a source catalog and application sources."""
    locales_dir = tmp_path / "locales"
    write_json(locales_dir / "en-US.json", SOURCE_CATALOG)

    source_dir = tmp_path / "src"
    source_dir.mkdir()
    (source_dir / "App.svelte").write_text(
        "<button>{$_('common.save')}</button>\n"
        "<p>{$_('common.greeting', { values: { name } })}</p>\n",
        encoding="utf-8"
    )
    (source_dir / "items.ts").write_text(
        "export const label = (kind: string) => t(`items.kind.${kind}`);\n"
        "export const countKey = 'items.count';\n",
        encoding="utf-8"
    )
    return tmp_path


@pytest.fixture
def test_settings(project_dir: Path) -> Settings:
    """Create test settings pointing at the temporary project."""
    return Settings(
        paths=PathSettings(
            locales_dir=project_dir / "locales",
            source_dir=project_dir / "src",
            guardrails_config=project_dir / "guardrails.json"
        ),
        translator=TranslatorSettings(
            api_key="test_deepl_key:fx",
            batch_size=40,
            max_attempts=3,
            base_delay=0.4
        )
    )


@pytest.fixture
def locale_store(test_settings: Settings) -> LocaleStore:
    """Create locale store for the temporary project."""
    return LocaleStore(test_settings.paths.locales_dir)


@pytest.fixture
def translation_service(test_settings: Settings) -> TranslationService:
    """Create translation service for testing."""
    return TranslationService(test_settings.translator)
