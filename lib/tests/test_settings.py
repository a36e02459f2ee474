from __future__ import annotations

from mandi_client import settings


def _use_tmp_config_dir(tmp_path, monkeypatch) -> None:
    def _config_dir(_: str) -> str:
        return str(tmp_path)

    monkeypatch.setattr(settings, "user_config_dir", _config_dir)
    monkeypatch.delenv(settings.ENV_API_URL, raising=False)
    monkeypatch.delenv(settings.ENV_API_TIMEOUT, raising=False)


def test_load_client_config_defaults_without_file(tmp_path, monkeypatch) -> None:
    _use_tmp_config_dir(tmp_path, monkeypatch)
    cfg = settings.load_client_config()
    assert cfg.base_url == "http://localhost:3001/api"
    assert cfg.timeout_s == 15.0
    assert cfg.token_key == "authToken"


def test_load_client_config_reads_api_table(tmp_path, monkeypatch) -> None:
    _use_tmp_config_dir(tmp_path, monkeypatch)
    tmp_path.joinpath("config.toml").write_text(
        "\n".join(
            [
                "[api]",
                'base_url = "mandi.example.com/api/"',
                "timeout_s = 5",
                'token_key = "jwt"',
                "",
            ]
        ),
        encoding="utf-8",
    )

    cfg = settings.load_client_config()

    assert cfg.base_url == "https://mandi.example.com/api"
    assert cfg.timeout_s == 5.0
    assert cfg.token_key == "jwt"


def test_env_overrides_config_file(tmp_path, monkeypatch) -> None:
    _use_tmp_config_dir(tmp_path, monkeypatch)
    tmp_path.joinpath("config.toml").write_text('[api]\nbase_url = "http://file.test/api"\n', encoding="utf-8")
    monkeypatch.setenv(settings.ENV_API_URL, "http://127.0.0.1:3001/api/")
    monkeypatch.setenv(settings.ENV_API_TIMEOUT, "2.5")

    cfg = settings.load_client_config()

    assert cfg.base_url == "http://127.0.0.1:3001/api"
    assert cfg.timeout_s == 2.5


def test_invalid_timeout_falls_back_to_default(tmp_path, monkeypatch) -> None:
    _use_tmp_config_dir(tmp_path, monkeypatch)
    tmp_path.joinpath("config.toml").write_text('[api]\ntimeout_s = "soon"\n', encoding="utf-8")
    monkeypatch.setenv(settings.ENV_API_TIMEOUT, "-1")
    assert settings.load_client_config().timeout_s == settings.TIMEOUT_DEFAULT


def test_normalize_base_url_defaults_to_https() -> None:
    assert settings.normalize_base_url("example.com/api") == "https://example.com/api"


def test_normalize_base_url_adds_api_path_to_bare_host() -> None:
    assert settings.normalize_base_url("mandi.example.com") == "https://mandi.example.com/api"
    assert settings.normalize_base_url("http://127.0.0.1:3001/") == "http://127.0.0.1:3001/api"


def test_normalize_base_url_keeps_root_without_api_path() -> None:
    assert settings.normalize_base_url("https://example.com", api_path=None) == "https://example.com"


def test_normalize_base_url_keeps_existing_path() -> None:
    assert settings.normalize_base_url("https://example.com/v2/api") == "https://example.com/v2/api"


def test_normalize_base_url_defaults_to_http_for_localhost() -> None:
    assert settings.normalize_base_url("localhost:3001/api") == "http://localhost:3001/api"


def test_normalize_base_url_strips_trailing_slash() -> None:
    assert settings.normalize_base_url(" https://example.com/api/ ") == "https://example.com/api"


def test_normalize_base_url_empty() -> None:
    assert settings.normalize_base_url(None) == ""
