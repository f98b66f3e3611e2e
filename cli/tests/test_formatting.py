from portainer_cli.formatting import (
    container_name,
    environment_type,
    format_epoch,
    format_ports,
    registry_type,
    short_id,
    size_mb,
)


def test_short_id_strips_digest_prefix() -> None:
    assert short_id("sha256:0123456789abcdef0123") == "0123456789ab"
    assert short_id(None) == ""


def test_container_name_drops_leading_slash() -> None:
    assert container_name("/web") == "web"


def test_format_ports_skips_unpublished() -> None:
    ports = [
        {"PrivatePort": 80, "PublicPort": 8080, "Type": "tcp"},
        {"PrivatePort": 443, "Type": "tcp"},
    ]
    assert format_ports(ports) == ["8080:80/tcp"]


def test_format_epoch_is_utc_iso() -> None:
    assert format_epoch(0) == "1970-01-01T00:00:00Z"
    assert format_epoch(None) is None


def test_type_codes_fall_back() -> None:
    assert environment_type(2) == "swarm"
    assert environment_type(99) == "other"
    assert registry_type(8) == "github"
    assert registry_type(None) == "unknown"


def test_size_mb_rounds() -> None:
    assert size_mb(3 * 1024 * 1024 + 10) == 3
