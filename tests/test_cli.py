import json

import yaml
from click.testing import CliRunner

from shkcodes import __version__
from shkcodes.cli import cli
from shkcodes.config import DEFAULT_CONFIG


def write_post(root, name, frontmatter, body="Body.\n"):
    folder = root / "content" / "posts" / name
    folder.mkdir(parents=True)
    text = "---\n" + yaml.safe_dump(frontmatter, sort_keys=False) + "---\n\n" + body
    (folder / "index.mdx").write_text(text, encoding="utf-8")


def test_version_option():
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_config_prints_defaults(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    result = CliRunner().invoke(cli, ["config"], catch_exceptions=False)
    assert result.exit_code == 0
    assert json.loads(result.output) == DEFAULT_CONFIG


def test_config_reports_invalid_site_yaml(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "site.yaml").write_text("plugins: 3\n", encoding="utf-8")
    result = CliRunner().invoke(cli, ["config"])
    assert result.exit_code == 1
    assert "Invalid configuration" in result.output
    assert "site.yaml" in result.output


def test_theme_outputs_merged_theme_and_modes(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    runner = CliRunner()
    result = runner.invoke(cli, ["theme"], catch_exceptions=False)
    assert result.exit_code == 0
    theme = json.loads(result.output)
    assert theme["colors"]["modes"]["dark"]["secondary"] == "#40F4AD"

    result = runner.invoke(cli, ["theme", "--mode", "dark"], catch_exceptions=False)
    assert result.exit_code == 0
    palette = json.loads(result.output)
    assert palette["background"] == "#191919"
    assert "modes" not in palette

    result = runner.invoke(cli, ["theme", "--mode", "sepia"])
    assert result.exit_code == 1
    assert "Unknown color mode" in result.output


def test_posts_lists_with_site_date_format(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    write_post(tmp_path, "dagger", {"title": "Dagger", "date": "2019-03-10", "tags": ["android"]})
    write_post(tmp_path, "views", {"title": "Views", "date": "2019-08-01", "tags": ["ui"]})
    runner = CliRunner()

    result = runner.invoke(cli, ["posts"], catch_exceptions=False)
    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert lines[0].startswith("01-08-2019  Views")
    assert lines[1].startswith("10-03-2019  Dagger")
    assert "[android]" in lines[1]

    result = runner.invoke(cli, ["posts", "--tag", "ui"], catch_exceptions=False)
    assert "Views" in result.output
    assert "Dagger" not in result.output

    result = runner.invoke(cli, ["posts", "--tag", "missing"], catch_exceptions=False)
    assert "No posts found." in result.output


def test_posts_uses_format_string_from_site_yaml(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "site.yaml").write_text(
        "plugins:\n"
        "  - resolve: '@lekoarts/gatsby-theme-minimal-blog'\n"
        "    options:\n"
        "      formatString: MMMM D, YYYY\n",
        encoding="utf-8",
    )
    write_post(tmp_path, "dagger", {"title": "Dagger", "date": "2019-03-10"})
    result = CliRunner().invoke(cli, ["posts"], catch_exceptions=False)
    assert result.output.startswith("March 10, 2019  Dagger")


def test_new_creates_post_without_prompting(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    result = CliRunner().invoke(
        cli,
        ["new", "Kotlin Flows 101", "--description", "Cold streams.", "--tag", "kotlin"],
        catch_exceptions=False,
    )
    assert result.exit_code == 0
    target = tmp_path / "content" / "posts" / "kotlin-flows-101" / "index.mdx"
    assert target.exists()
    text = target.read_text(encoding="utf-8")
    frontmatter = yaml.safe_load(text.split("---\n")[1])
    assert frontmatter["title"] == "Kotlin Flows 101"
    assert frontmatter["description"] == "Cold streams."
    assert frontmatter["tags"] == ["kotlin"]
    assert "date" in frontmatter

    result = CliRunner().invoke(cli, ["new", "Kotlin Flows 101", "--yes"])
    assert result.exit_code != 0
    assert "already exists" in result.output


def test_new_prompts_for_missing_fields(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    answers = iter(["Prompted description", "android, testing"])

    class FakeQuestion:
        def __init__(self, answer):
            self.answer = answer

        def ask(self):
            return self.answer

    monkeypatch.setattr(
        "shkcodes.cli.questionary.text", lambda *a, **k: FakeQuestion(next(answers))
    )
    result = CliRunner().invoke(cli, ["new", "Espresso Tips"], catch_exceptions=False)
    assert result.exit_code == 0
    text = (tmp_path / "content" / "posts" / "espresso-tips" / "index.mdx").read_text(
        encoding="utf-8"
    )
    frontmatter = yaml.safe_load(text.split("---\n")[1])
    assert frontmatter["description"] == "Prompted description"
    assert frontmatter["tags"] == ["android", "testing"]


def test_new_aborts_when_prompt_cancelled(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)

    class Cancelled:
        def ask(self):
            return None

    monkeypatch.setattr("shkcodes.cli.questionary.text", lambda *a, **k: Cancelled())
    result = CliRunner().invoke(cli, ["new", "Espresso Tips"])
    assert result.exit_code != 0
    assert not (tmp_path / "content" / "posts" / "espresso-tips").exists()


def test_new_with_yes_skips_prompts(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)

    def fail(*args, **kwargs):
        raise AssertionError("should not prompt")

    monkeypatch.setattr("shkcodes.cli.questionary.text", fail)
    result = CliRunner().invoke(cli, ["new", "Quiet Post", "--yes"], catch_exceptions=False)
    assert result.exit_code == 0


def test_module_main_entrypoint():
    from shkcodes.__main__ import main

    assert callable(main)


def test_main_invokes_cli(monkeypatch):
    import shkcodes.cli as cli_mod

    called = {}
    monkeypatch.setattr(cli_mod, "cli", lambda: called.setdefault("ran", True))
    cli_mod.main()
    assert called["ran"]


def test_config_and_theme_print_yaml_dates(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "site.yaml").write_text(
        "plugins:\n"
        "  - resolve: '@lekoarts/gatsby-theme-minimal-blog'\n"
        "    options:\n"
        "      since: 2020-01-01\n",
        encoding="utf-8",
    )
    (tmp_path / "theme.yaml").write_text("released: 2020-01-01\n", encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(cli, ["config"], catch_exceptions=False)
    assert result.exit_code == 0
    plugin = json.loads(result.output)["plugins"][0]
    assert plugin["options"]["since"] == "2020-01-01"

    result = runner.invoke(cli, ["theme"], catch_exceptions=False)
    assert result.exit_code == 0
    assert json.loads(result.output)["released"] == "2020-01-01"
