# tests/test_settings.py
from __future__ import annotations

from pathlib import Path

import pytest

import kakao_api.utils.settings as settings_mod
from kakao_api.capabilities.coord_to_district import coord_to_district


@pytest.fixture(autouse=True)
def _fresh_settings_cache(monkeypatch: pytest.MonkeyPatch):
    for name in (
        "KAKAO_API_KEY_PREFIX",
        "KAKAO_API_REST_API_KEY",
        "KAKAO_API_LOCAL_API_BASE_URL",
        "KAKAO_API_HTTP_TIMEOUT_SECONDS",
    ):
        monkeypatch.delenv(name, raising=False)
    settings_mod._load_yaml_parameters.cache_clear()
    settings_mod.get_settings.cache_clear()
    yield
    settings_mod._load_yaml_parameters.cache_clear()
    settings_mod.get_settings.cache_clear()


def _write_yaml(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "parameters.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_yaml_values_are_loaded(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    path = _write_yaml(
        tmp_path,
        "local_api_base_url: https://yaml.test/v2/local\nhttp_timeout_seconds: 12.5\n",
    )
    monkeypatch.setattr(settings_mod, "PARAMETERS_PATH", path)

    s = settings_mod.get_settings()

    assert str(s.local_api_base_url) == "https://yaml.test/v2/local"
    assert s.http_timeout_seconds == 12.5
    assert s.key_prefix == "KakaoAK"
    assert s.max_video_upload_bytes == 50 * 1024 * 1024


def test_env_overrides_yaml(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    path = _write_yaml(tmp_path, "http_timeout_seconds: 12.5\nkey_prefix: FromYaml\n")
    monkeypatch.setattr(settings_mod, "PARAMETERS_PATH", path)
    monkeypatch.setenv("KAKAO_API_HTTP_TIMEOUT_SECONDS", "3")
    monkeypatch.setenv("KAKAO_API_REST_API_KEY", "env-key")

    s = settings_mod.get_settings()

    assert s.http_timeout_seconds == 3.0
    assert s.key_prefix == "FromYaml"
    assert s.default_secret() == "env-key"


def test_missing_yaml_falls_back_to_defaults(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr(settings_mod, "PARAMETERS_PATH", tmp_path / "absent.yaml")

    s = settings_mod.get_settings()

    assert str(s.pose_api_base_url) == "https://cv-api.kakaobrain.com/pose"
    assert s.http_timeout_seconds == 60.0


def test_non_mapping_yaml_is_ignored(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr(settings_mod, "PARAMETERS_PATH", _write_yaml(tmp_path, "- a\n- b\n"))

    assert settings_mod.get_settings().key_prefix == "KakaoAK"


def test_get_settings_is_cached(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr(settings_mod, "PARAMETERS_PATH", tmp_path / "absent.yaml")

    assert settings_mod.get_settings() is settings_mod.get_settings()


def test_factories_use_process_settings_when_none_given(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    path = _write_yaml(tmp_path, "key_prefix: Custom\nlocal_api_base_url: https://yaml.test/v2/local\n")
    monkeypatch.setattr(settings_mod, "PARAMETERS_PATH", path)
    monkeypatch.setenv("KAKAO_API_REST_API_KEY", "env-key")

    builder = coord_to_district(127.1, 37.4)

    assert builder.auth_key == "Custom env-key"
    assert builder.endpoint() == "https://yaml.test/v2/local/geo/coord2regioncode.json"
    assert builder.settings is settings_mod.get_settings()
