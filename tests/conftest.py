"""Shared fixtures: a web root on disk and an importable asset package."""

import sys

import pytest

from roost.resources.loader import DefaultResourceLoader

ASSET_PACKAGE = "roost_test_assets"


@pytest.fixture
def web_root(tmp_path):
    """A web root with a ``public/`` directory of static files."""
    root = tmp_path / "web"
    public = root / "public"
    (public / "css").mkdir(parents=True)

    (public / "site.css").write_text("body { color: red; }")
    (public / "app.js").write_text("console.log('hello');")
    (public / "data.bin").write_bytes(b"\x00\x01\x02\x03")
    (public / "css" / "main.css").write_text("h1 { font-size: 2em; }")

    (tmp_path / "secret.txt").write_text("top secret")
    return root


@pytest.fixture
def asset_package(tmp_path, monkeypatch):
    """An importable package shipping ``static/`` data files."""
    pkgs = tmp_path / "pkgs"
    package = pkgs / ASSET_PACKAGE
    static = package / "static"
    static.mkdir(parents=True)
    (package / "__init__.py").write_text("")
    (static / "site.css").write_text("/* packaged site.css */")
    (static / "lib.js").write_text("export const lib = 1;")

    monkeypatch.delitem(sys.modules, ASSET_PACKAGE, raising=False)
    monkeypatch.syspath_prepend(str(pkgs))
    return ASSET_PACKAGE


@pytest.fixture
def loader(web_root, asset_package):
    """Loader rooted at the web root with the asset package as classpath."""
    return DefaultResourceLoader(base_dir=web_root, package=asset_package)
