"""Tests for the command-line renderer.

The backend is already initialized for the test session, so end-to-end runs
replace ``init_backend`` with a no-op.
"""

import json

import pytest


@pytest.fixture
def no_backend_init(monkeypatch):
    monkeypatch.setattr("phongtrace.cli.init_backend", lambda max_workers=None: None)


class TestParseArgs:
    """Tests for argument parsing."""

    def test_defaults(self):
        from phongtrace.cli import parse_args

        args = parse_args([])
        assert (args.width, args.height) == (1024, 768)
        assert args.workers == [1, 2, 4, 8]
        assert args.output_dir == "img_output"
        assert args.image_format == "ppm"
        assert args.scene is None
        assert not args.no_save
        assert not args.quiet

    def test_positional_size_and_workers(self):
        from phongtrace.cli import parse_args

        args = parse_args(["320", "240", "1", "3"])
        assert (args.width, args.height) == (320, 240)
        assert args.workers == [1, 3]

    def test_size_without_workers_uses_default_workers(self):
        from phongtrace.cli import parse_args

        args = parse_args(["64", "48", "--format", "png"])
        assert args.workers == [1, 2, 4, 8]
        assert args.image_format == "png"

    @pytest.mark.parametrize(
        "argv",
        [
            ["320"],
            ["0", "240"],
            ["320", "240", "-2"],
            ["abc", "240"],
            ["--format", "bmp"],
        ],
    )
    def test_invalid_arguments_exit(self, argv):
        from phongtrace.cli import parse_args

        with pytest.raises(SystemExit) as exc_info:
            parse_args(argv)
        assert exc_info.value.code == 2


class TestMain:
    """Tests for the main entry point."""

    def test_missing_scene_file(self, tmp_path, capsys):
        from phongtrace.cli import main

        code = main(["8", "6", "1", "--scene", str(tmp_path / "missing.json"), "--no-save"])
        assert code == 1
        assert capsys.readouterr().err.startswith("Error: ")

    def test_scene_file_must_be_object(self, tmp_path, capsys):
        from phongtrace.cli import main

        scene_file = tmp_path / "scene.json"
        scene_file.write_text("[1, 2, 3]")
        code = main(["8", "6", "1", "--scene", str(scene_file), "--no-save"])
        assert code == 1
        assert "JSON object" in capsys.readouterr().err

    def test_render_and_save(self, tmp_path, capsys, no_backend_init):
        from phongtrace.cli import main

        code = main(["8", "6", "1", "2", "--output-dir", str(tmp_path), "--quiet"])
        assert code == 0

        out = capsys.readouterr().out.splitlines()
        assert [line.split()[0] for line in out] == ["Threads=1", "Threads=2"]
        assert all(line.split()[1].startswith("Time(s)=") for line in out)

        for workers in (1, 2):
            lines = (tmp_path / f"output_parallel_{workers}.ppm").read_text().splitlines()
            assert lines[:3] == ["P3", "8 6", "255"]
            assert len(lines) == 3 + 6
        assert (tmp_path / "output_parallel_1.ppm").read_text() == (
            tmp_path / "output_parallel_2.ppm"
        ).read_text()

    def test_no_save(self, tmp_path, no_backend_init):
        from phongtrace.cli import main

        out_dir = tmp_path / "out"
        assert main(["4", "4", "1", "--output-dir", str(out_dir), "--no-save", "--quiet"]) == 0
        assert not out_dir.exists()

    def test_scene_file(self, tmp_path, no_backend_init):
        from phongtrace.cli import main

        scene_file = tmp_path / "scene.json"
        scene_file.write_text(
            json.dumps(
                {
                    "materials": [{"color": [1.0, 0.0, 0.0], "kd": 1.0, "ks": 0.0}],
                    "spheres": [{"center": [0.0, 0.0, -5.0], "radius": 1.0, "material_id": 0}],
                    "ambient": [1.0, 1.0, 1.0],
                    "camera": {"eye": [0.0, 0.0, 0.0], "fov": 60.0},
                }
            )
        )
        code = main(
            ["3", "3", "1", "--scene", str(scene_file), "--output-dir", str(tmp_path), "--format", "png"]
        )
        assert code == 0

        from PIL import Image

        with Image.open(tmp_path / "output_parallel_1.png") as img:
            assert img.size == (3, 3)
            assert img.getpixel((1, 1)) == (255, 0, 0)

    def test_invalid_scene_contents(self, tmp_path, capsys, no_backend_init):
        from phongtrace.cli import main

        scene_file = tmp_path / "scene.json"
        scene_file.write_text(json.dumps({"spheres": [{"radius": 1.0, "material_id": 7}]}))
        code = main(["3", "3", "1", "--scene", str(scene_file), "--no-save"])
        assert code == 1
        assert "material_id" in capsys.readouterr().err
