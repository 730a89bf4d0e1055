import json

from monocheck_cli.workspace import extract_aliases, read_jsonc, scan_workspace

TSCONFIG = """{
  // editor settings
  "compilerOptions": {
    "baseUrl": ".",
    "paths": {
      "@web/*": ["./src/*"], /* main alias */
      "@shared": ["../shared/src"],
      "@empty/*": [],
    },
  },
}
"""


def test_read_jsonc_keeps_strings_intact(tmp_path):
    path = tmp_path / "tsconfig.json"
    path.write_text('{"url": "http://x//y", "glob": "a/*/b", }')
    assert read_jsonc(path) == {"url": "http://x//y", "glob": "a/*/b"}


def test_scan_workspace(tmp_path, write):
    web = tmp_path / "packages" / "web"
    write(web / "tsconfig.json", TSCONFIG)
    write(web / "src" / "index.ts", "")
    write(
        web / "package.json",
        json.dumps({"name": "@acme/web", "dependencies": {"react": "18"}, "devDependencies": {"vitest": "1"}}),
    )
    write(tmp_path / "tools" / "tsconfig.json", "{}")
    write(tmp_path / "node_modules" / "dep" / "tsconfig.json", "{}")
    write(tmp_path / ".cache" / "tsconfig.json", "{}")

    found = scan_workspace(tmp_path)

    assert [d.path for d in found] == [str(web / "src"), str(tmp_path / "tools")]
    web_config = found[0]
    assert web_config.workspace_name == "@acme/web"
    assert web_config.dependencies == {"react": "18", "vitest": "1"}
    assert web_config.manifest_ref == str(web / "tsconfig.json")
    assert web_config.report_path == str(web / "import-check-report.json")
    assert found[1].workspace_name is None


def test_broken_package_json_is_logged(tmp_path, write, caplog):
    write(tmp_path / "app" / "tsconfig.json", "{}")
    write(tmp_path / "app" / "package.json", "{broken")

    (found,) = scan_workspace(tmp_path)

    assert found.dependencies == {}
    assert "Could not read" in caplog.text


def test_extract_aliases(tmp_path, write):
    tsconfig = write(tmp_path / "packages" / "web" / "tsconfig.json", TSCONFIG)

    aliases = extract_aliases(tsconfig)

    assert set(aliases) == {"@web", "@shared"}
    assert aliases["@web"].base_path == str(tmp_path / "packages" / "web" / "src")
    assert aliases["@shared"].base_path == str(tmp_path / "packages" / "shared" / "src")


def test_extract_aliases_honours_base_url(tmp_path, write):
    tsconfig = write(
        tmp_path / "tsconfig.json",
        json.dumps({"compilerOptions": {"baseUrl": "src", "paths": {"~/*": ["*"]}}}),
    )
    assert extract_aliases(tsconfig)["~"].base_path == str(tmp_path / "src")


def test_extract_aliases_unreadable(tmp_path):
    assert extract_aliases(tmp_path / "missing.json") == {}
