import io

import pytest

from glslpreprocessor.__main__ import main


def run_main(argv, stdin_text=""):
    stdout = io.StringIO()
    stderr = io.StringIO()
    code = main(argv, stdin=io.StringIO(stdin_text), stdout=stdout,
                stderr=stderr)
    return code, stdout.getvalue(), stderr.getvalue()


def test_stdin_to_stdout():
    code, out, err = run_main(["-"], "#define PI 3.14\nfloat r = PI;\n")
    assert code == 0
    assert out == "float r = 3.14;\n"
    assert err == ""


def test_predefined_macros():
    code, out, _ = run_main(["-", "-D", "DEBUG", "-D", "N=4"],
                            "#ifdef DEBUG\nint n = N;\n#endif\n")
    assert code == 0
    assert out == "int n = 4;\n"


def test_keep_comments():
    code, out, _ = run_main(["-", "--keep-comments"], "x; // note\n")
    assert out == "x; // note\n"


def test_error_exit_code():
    code, out, err = run_main(["-"], "a\n#endif\n")
    assert code == 1
    assert out == ""
    assert err.strip() == (
        "<stdin>:2: error: #endif without matching #ifdef/#ifndef"
    )


def test_file_input_with_virtual_path(tmp_path):
    engine = tmp_path / "engine"
    engine.mkdir()
    (engine / "common.glsl").write_text("uniform float t;\n")
    main_file = tmp_path / "main.frag"
    main_file.write_text("#include <Engine/common.glsl>\nvoid main() {}\n")
    output = tmp_path / "out.frag"
    code, out, _ = run_main([str(main_file), "-B", str(tmp_path),
                             "-V", f"Engine={engine}",
                             "-o", str(output)])
    assert code == 0
    assert out == ""
    assert output.read_text() == "uniform float t;\nvoid main() {}\n"


def test_line_markers_and_base_path(tmp_path):
    (tmp_path / "a.glsl").write_text("a\n")
    code, out, _ = run_main(["-", "-B", str(tmp_path), "--line-markers"],
                            '#include "a.glsl"\n')
    assert code == 0
    assert out.startswith('#line 1 "')
    assert out.endswith('#line 2 "<stdin>"\n')


def test_include_depth_option(tmp_path):
    (tmp_path / "a.glsl").write_text("a\n")
    code, _, err = run_main(["-", "-B", str(tmp_path),
                             "--max-include-depth", "0"],
                            '#include "a.glsl"\n')
    assert code == 1
    assert "Maximum include depth exceeded" in err


def test_missing_input_file(tmp_path):
    code, _, err = run_main([str(tmp_path / "nope.frag")])
    assert code == 1
    assert err.startswith("glslpp: I/O error:")


def test_invalid_option_value():
    with pytest.raises(SystemExit) as excinfo:
        run_main(["-", "--max-output-size", "-5"])
    assert excinfo.value.code == 2


def test_invalid_virtual_path():
    with pytest.raises(SystemExit):
        run_main(["-", "-V", "=/nowhere"])
