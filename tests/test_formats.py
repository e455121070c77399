import pytest

from cfgkit.errors import FeatureDisabledError, UnsupportedFormatError
from cfgkit.formats import Format, resolve_format

ALL = frozenset(Format)

# ================================================================
# Format.from_extension
# ================================================================


@pytest.mark.parametrize(
    "ext, expected",
    [
        (".json", Format.JSON),
        ("json", Format.JSON),
        (".yaml", Format.YAML),
        (".yml", Format.YAML),
        (".toml", Format.TOML),
        (".TOML", Format.TOML),
        (".ini", None),
        ("", None),
    ],
)
def test_from_extension(ext, expected):
    assert Format.from_extension(ext) is expected


def test_format_labels():
    assert [f.label for f in Format] == ["JSON", "YAML", "TOML"]


# ================================================================
# resolve_format
# ================================================================


@pytest.mark.parametrize(
    "path, expected",
    [
        ("config.json", Format.JSON),
        ("dir/settings.yaml", Format.YAML),
        ("app.yml", Format.YAML),
        ("pyproject.toml", Format.TOML),
        ("CONFIG.JSON", Format.JSON),
        ("Settings.Yml", Format.YAML),
        ("archive.tar.toml", Format.TOML),
    ],
)
def test_resolve_known_extensions(path, expected):
    assert resolve_format(path, ALL) is expected


def test_resolve_depends_only_on_extension(tmp_path):
    """Different basenames, same extension -> same format, file never opened."""
    names = ["a.toml", "b.toml", "does/not/exist.toml"]
    assert {resolve_format(tmp_path / n, ALL) for n in names} == {Format.TOML}


def test_resolve_ignores_content(tmp_path):
    path = tmp_path / "garbage.json"
    path.write_bytes(b"\x00\xff not json at all")
    assert resolve_format(path, ALL) is Format.JSON


@pytest.mark.parametrize("name", ["config.xyz", "config", "config.json.bak", ".json"])
def test_resolve_unsupported(name):
    with pytest.raises(UnsupportedFormatError) as exc:
        resolve_format(name, ALL)
    assert "Unsupported config file extension" in str(exc.value)


def test_unsupported_carries_extension_and_path(tmp_path):
    path = tmp_path / "config.xyz"
    with pytest.raises(UnsupportedFormatError) as exc:
        resolve_format(path, ALL)
    assert exc.value.extension == ".xyz"
    assert exc.value.path == path


def test_resolve_disabled_format():
    with pytest.raises(FeatureDisabledError) as exc:
        resolve_format("config.yaml", {Format.JSON, Format.TOML})
    assert exc.value.format is Format.YAML
    assert "YAML support is not enabled" in str(exc.value)


def test_disabled_is_not_unsupported():
    with pytest.raises(FeatureDisabledError) as exc:
        resolve_format("config.toml", set())
    assert not isinstance(exc.value, UnsupportedFormatError)


def test_unknown_extension_wins_over_disabled():
    with pytest.raises(UnsupportedFormatError):
        resolve_format("config.xyz", set())


def test_resolve_defaults_to_installed_formats(monkeypatch):
    monkeypatch.setattr(
        "cfgkit.codecs.find_spec",
        lambda name: None if name == "tomli_w" else object(),
    )
    assert resolve_format("a.yaml") is Format.YAML
    with pytest.raises(FeatureDisabledError):
        resolve_format("a.toml")
