"""Tests for the built-in filesystem commands."""

import json

import pytest

from mc.client import new_client
from mc.client.fs import FsClient
from mc.commands.cp import plan_copy
from mc.commands.diff import DIFFERENT_SIZE, DIFFERENT_TYPE, ONLY_IN_FIRST, ONLY_IN_SECOND, compare
from mc.commands.share import parse_expiry
from mc.config.schema import McConfig, default_config
from mc.errors import UnsupportedBackendError, UsageError


@pytest.fixture
def tree(tmp_path):
    root = tmp_path / "tree"
    (root / "docs").mkdir(parents=True)
    (root / "readme.txt").write_text("hello")
    (root / "docs" / "guide.md").write_text("# guide")
    return root


def _json_lines(output):
    return [json.loads(line) for line in output.strip().splitlines()]


class TestClientSelection:
    def test_paths_use_filesystem(self, tmp_path):
        assert isinstance(new_client(str(tmp_path)), FsClient)
        assert isinstance(new_client(f"file://{tmp_path}"), FsClient)

    def test_alias_to_cloud_is_unsupported(self):
        with pytest.raises(UnsupportedBackendError, match="play.minio.io"):
            new_client("play/bucket", default_config())

    def test_alias_to_file_url(self, tmp_path):
        config = McConfig(aliases={"local": f"file://{tmp_path}"})
        client = new_client("local/sub", config)
        assert client.path == tmp_path / "sub"


class TestLs:
    def test_lists_children(self, invoke, tree):
        result = invoke("--json", "ls", str(tree))
        assert result.exit_code == 0
        entries = _json_lines(result.output)
        assert [(e["key"], e["type"]) for e in entries] == [("docs/", "folder"), ("readme.txt", "file")]
        assert entries[1]["size"] == 5

    def test_recursive(self, invoke, tree):
        result = invoke("--json", "ls", "--recursive", str(tree))
        assert [e["key"] for e in _json_lines(result.output)] == ["docs/guide.md", "readme.txt"]

    def test_mimic_prints_names(self, invoke, tree):
        result = invoke("--mimic", "ls", str(tree))
        assert result.output.splitlines() == ["docs/", "readme.txt"]

    def test_missing_path(self, invoke, tmp_path):
        result = invoke("ls", str(tmp_path / "nope"))
        assert result.exit_code == 1
        assert "does not exist" in result.output


class TestMb:
    def test_creates_folder(self, invoke, tmp_path):
        result = invoke("mb", str(tmp_path / "bucket"))
        assert result.exit_code == 0
        assert (tmp_path / "bucket").is_dir()
        assert "Bucket created successfully" in result.output

    def test_existing_folder_fails(self, invoke, tmp_path):
        result = invoke("mb", str(tmp_path))
        assert result.exit_code == 1
        assert "already exists" in result.output


class TestCat:
    def test_streams_file(self, invoke, tree):
        result = invoke("cat", str(tree / "readme.txt"), str(tree / "docs" / "guide.md"))
        assert result.exit_code == 0
        assert result.output == "hello# guide"

    def test_folder_fails(self, invoke, tree):
        result = invoke("cat", str(tree))
        assert result.exit_code == 1
        assert "is a folder" in result.output


class TestCp:
    def test_single_file_to_new_path(self, invoke, tree, tmp_path):
        result = invoke("cp", str(tree / "readme.txt"), str(tmp_path / "copy.txt"))
        assert result.exit_code == 0
        assert (tmp_path / "copy.txt").read_text() == "hello"

    def test_into_existing_folder(self, invoke, tree, tmp_path):
        target = tmp_path / "out"
        target.mkdir()
        invoke("cp", str(tree / "readme.txt"), str(target))
        assert (target / "readme.txt").read_text() == "hello"

    def test_folder_needs_recursive(self, invoke, tree, tmp_path):
        result = invoke("cp", str(tree), str(tmp_path / "out"))
        assert result.exit_code == 1
        assert "--recursive" in result.output

    def test_recursive_tree(self, invoke, tree, tmp_path):
        result = invoke("--quiet", "cp", "-r", str(tree), str(tmp_path / "out"))
        assert result.exit_code == 0
        assert result.output == ""
        assert (tmp_path / "out" / "docs" / "guide.md").read_text() == "# guide"

    def test_plan_multiple_sources_into_folder(self, tree, tmp_path):
        plan = plan_copy([str(tree / "readme.txt"), str(tree / "docs")], str(tmp_path / "dst"), True, None)
        assert sorted(t.target for t in plan) == sorted([
            str(tmp_path / "dst" / "readme.txt"),
            str(tmp_path / "dst" / "docs" / "guide.md"),
        ])

    def test_cloud_target_is_unsupported(self, invoke, tree):
        result = invoke("cp", str(tree / "readme.txt"), "https://s3.amazonaws.com/bucket/")
        assert result.exit_code == 1
        assert "No storage backend" in result.output


class TestMirror:
    def test_copies_to_every_target(self, invoke, tree, tmp_path):
        result = invoke("mirror", str(tree), str(tmp_path / "m1"), str(tmp_path / "m2"))
        assert result.exit_code == 0
        for target in ("m1", "m2"):
            assert (tmp_path / target / "docs" / "guide.md").read_text() == "# guide"

    def test_skips_equal_files_unless_forced(self, invoke, tree, tmp_path):
        invoke("mirror", str(tree), str(tmp_path / "m"))
        again = invoke("--json", "mirror", str(tree), str(tmp_path / "m"))
        assert again.output.strip() == ""
        forced = invoke("--json", "mirror", "--force", str(tree), str(tmp_path / "m"))
        assert len(_json_lines(forced.output)) == 2

    def test_source_must_be_folder(self, invoke, tree, tmp_path):
        result = invoke("mirror", str(tree / "readme.txt"), str(tmp_path / "m"))
        assert result.exit_code == 1
        assert "must be a folder" in result.output


class TestDiff:
    def test_tree_differences(self, tree, tmp_path):
        other = tmp_path / "other"
        (other / "docs").mkdir(parents=True)
        (other / "readme.txt").write_text("hello, world")
        (other / "extra.txt").write_text("x")
        diffs = list(compare(str(tree), str(other)))
        kinds = sorted(d.diff for d in diffs)
        assert kinds == sorted([ONLY_IN_SECOND, ONLY_IN_FIRST, DIFFERENT_SIZE])

    def test_file_vs_folder(self, tree):
        diffs = list(compare(str(tree / "readme.txt"), str(tree / "docs")))
        assert [d.diff for d in diffs] == [DIFFERENT_TYPE]

    def test_identical_files(self, invoke, tree):
        result = invoke("diff", str(tree / "readme.txt"), str(tree / "readme.txt"))
        assert result.exit_code == 0
        assert result.output == ""


class TestShareAndAccess:
    @pytest.mark.parametrize("value, seconds", [("168h", 604800), ("2d12h", 216000), ("30m", 1800), ("45s", 45)])
    def test_parse_expiry(self, value, seconds):
        assert parse_expiry(value).total_seconds() == seconds

    @pytest.mark.parametrize("value", ["", "8d", "0s", "soon", "12"])
    def test_bad_expiry(self, value):
        with pytest.raises(UsageError):
            parse_expiry(value)

    def test_share_on_filesystem_is_unsupported(self, invoke, tree):
        result = invoke("share", str(tree / "readme.txt"))
        assert result.exit_code == 1
        assert "Sharing is not supported" in result.output

    def test_access_on_filesystem_is_unsupported(self, invoke, tree):
        result = invoke("access", str(tree), "readonly")
        assert result.exit_code == 1
        assert "not supported" in result.output


class TestConfigCommand:
    def test_alias_add_list_remove(self, invoke, config_dir):
        assert invoke("config", "alias", "add", "backup", "file:///srv/backup").exit_code == 0
        saved = json.loads((config_dir / "config.json").read_text())
        assert saved["aliases"]["backup"] == "file:///srv/backup"

        listing = invoke("config", "alias", "list")
        assert "backup: file:///srv/backup" in listing.output

        assert invoke("config", "alias", "remove", "backup").exit_code == 0
        assert "backup" not in json.loads((config_dir / "config.json").read_text())["aliases"]

    def test_invalid_alias_is_rejected(self, invoke, config_dir):
        invoke()
        before = (config_dir / "config.json").read_bytes()
        result = invoke("config", "alias", "add", "1bad", "https://example.com")
        assert result.exit_code == 1
        assert "rejected" in result.output
        assert (config_dir / "config.json").read_bytes() == before

    def test_remove_missing_alias(self, invoke):
        result = invoke("config", "alias", "remove", "ghost")
        assert result.exit_code == 1
        assert "ghost" in result.output

    def test_host_add_and_remove(self, invoke, config_dir):
        result = invoke("config", "host", "add", "minio.local:*", "AK", "SK", "--api", "S3v2")
        assert result.exit_code == 0
        host = json.loads((config_dir / "config.json").read_text())["hosts"]["minio.local:*"]
        assert host == {"accessKeyId": "AK", "secretAccessKey": "SK", "api": "S3v2"}

        assert invoke("config", "host", "remove", "minio.local:*").exit_code == 0
        assert "minio.local:*" not in json.loads((config_dir / "config.json").read_text())["hosts"]
