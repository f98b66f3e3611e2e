from portainer_cli import config


def _isolate(tmp_path, monkeypatch) -> None:  # noqa: ANN001
    def _config_dir(_: str) -> str:
        return str(tmp_path)

    monkeypatch.setattr(config, "user_config_dir", _config_dir)
    for name in (config.ENV_URL, config.ENV_API_KEY, config.ENV_WRITE_ENABLED):
        monkeypatch.delenv(name, raising=False)


def test_save_config_round_trips_through_toml(tmp_path, monkeypatch) -> None:
    _isolate(tmp_path, monkeypatch)
    cfg = config.AppConfig(base_url="https://portainer.example", api_key="ptr_abc", write_enabled=True)

    path = config.save_config(cfg)
    contents = tmp_path.joinpath("config.toml").read_text(encoding="utf-8")

    assert path.endswith("config.toml")
    assert 'api_key = "ptr_abc"' in contents
    assert config.load_file_config() == cfg


def test_load_config_missing_file_returns_defaults(tmp_path, monkeypatch) -> None:
    _isolate(tmp_path, monkeypatch)
    assert config.load_config() == config.default_config()


def test_env_overrides_file(tmp_path, monkeypatch) -> None:
    _isolate(tmp_path, monkeypatch)
    config.save_config(config.AppConfig(base_url="https://file.example", api_key="file_key", write_enabled=True))
    monkeypatch.setenv(config.ENV_URL, "https://env.example/")
    monkeypatch.setenv(config.ENV_WRITE_ENABLED, "false")

    cfg = config.load_config()

    assert cfg.base_url == "https://env.example"
    assert cfg.api_key == "file_key"
    assert cfg.write_enabled is False


def test_write_enabled_accepts_common_true_values(monkeypatch) -> None:
    for raw in ("1", "true", "TRUE", "yes", "on"):
        monkeypatch.setenv(config.ENV_WRITE_ENABLED, raw)
        assert config.apply_env(config.default_config()).write_enabled is True
    monkeypatch.setenv(config.ENV_WRITE_ENABLED, "nope")
    assert config.apply_env(config.default_config()).write_enabled is False


def test_require_connection_names_missing_variables() -> None:
    try:
        config.require_connection(config.AppConfig(base_url="https://portainer.example"))
    except config.ConfigError as exc:
        assert config.ENV_API_KEY in str(exc)
        assert config.ENV_URL not in str(exc)
    else:
        raise AssertionError("ConfigError not raised")


def test_normalize_base_url_defaults_to_https() -> None:
    assert config.normalize_base_url("portainer.example:9443") == "https://portainer.example:9443"


def test_normalize_base_url_defaults_to_http_for_localhost() -> None:
    assert config.normalize_base_url("127.0.0.1:9000") == "http://127.0.0.1:9000"
