import pytest

from glslpreprocessor import Config, preprocess
from glslpreprocessor.exceptions import DirectiveSyntaxError


def run_case(source, expected, config=None):
    result = preprocess(source, "test.glsl", config=config)
    assert result.success, result.error
    assert result.output == expected


def run_error(source, config=None):
    result = preprocess(source, "test.glsl", config=config)
    assert not result.success
    assert result.output is None
    return result.error


def test_define():
    run_case("#define FOO 1\nFOO\n", "1\n")


def test_define_scenario():
    result = preprocess("#define PI 3.14\nfloat r = PI * 2.0;", "test.glsl")
    assert "float r = 3.14 * 2.0;" in result.output


def test_define_lines_are_not_emitted():
    run_case("#define FOO 1\n", "")


def test_blank_define():
    run_case("#define FOO\nFOO\n", "\n")


def test_define_parens():
    run_case("#define FOO (x)\nFOO\n", "(x)\n")


def test_define_with_comment():
    run_case("#define FOO 1 // comment\nFOO\n", "1\n")


def test_define_with_tab_separator():
    run_case("#define\tFOO\t  1\nFOO\n", "1\n")


def test_redefine_replaces_body():
    run_case("#define FOO 1\n#define FOO 2\nFOO\n", "2\n")


def test_define_simple_referential():
    run_case("#define FOO FOO\nFOO\n", "FOO\n")


def test_body_is_not_rescanned():
    source = ("#define x (4 + y)\n"
              "#define y (2 * x)\n"
              "x\n"
              "y\n")
    run_case(source, "(4 + y)\n(2 * x)\n")


def test_body_with_other_macro_not_expanded():
    source = ("#define I 1\n"
              "#define J I + 2\n"
              "J\n")
    run_case(source, "I + 2\n")


def test_partial_match():
    run_case("#define FOO\nFOOBAR _FOO FOO_\n", "FOOBAR _FOO FOO_\n")


def test_repeated_macro():
    run_case("#define A value\nA A\n", "value value\n")


def test_adjacent_symbols():
    run_case("#define N 4\nvec3 a[N];x=N*N+(N);\n", "vec3 a[4];x=4*4+(4);\n")


def test_numbers_are_not_identifiers():
    run_case("#define e 5\n#define f 1.0\n1e5 + e * 2.0f\n",
             "1e5 + 5 * 2.0f\n")


def test_case_sensitive_lookup():
    run_case("#define Foo 1\nfoo FOO Foo\n", "foo FOO 1\n")


def test_undef():
    source = ("#define TEST_MACRO 42\n"
              "int before = TEST_MACRO;\n"
              "#undef TEST_MACRO\n"
              "int after = TEST_MACRO;")
    run_case(source, "int before = 42;\nint after = TEST_MACRO;\n")


def test_undef_not_defined():
    run_case("#undef FOO\nFOO", "FOO\n")


def test_undef_without_name():
    run_case("#undef    \n", "")


def test_invalid_define():
    error = run_error("#define\n")
    assert error.message == "Invalid define directive"
    assert error.kind is DirectiveSyntaxError
    assert error.line == 1


def test_define_name_must_be_identifier():
    error = run_error("a\n#define 1X 2\n")
    assert error.message == "Invalid define directive"
    assert error.line == 2


def test_predefined_macros():
    config = Config(defines={"QUALITY": "2", "USE_SHADOWS": None})
    run_case("#ifdef USE_SHADOWS\nint q = QUALITY;\n#endif\n",
             "int q = 2;\n", config=config)


def test_macros_do_not_persist_between_runs():
    assert preprocess("#define FOO 1\nFOO\n", "a.glsl").output == "1\n"
    assert preprocess("FOO\n", "b.glsl").output == "FOO\n"


def test_too_many_defines():
    config = Config(max_defines=2)
    error = run_error("#define A\n#define B\n#define C\n", config=config)
    assert error.message == "Too many defines"
    assert error.line == 3


def test_redefine_at_capacity_is_allowed():
    config = Config(max_defines=2)
    run_case("#define A 1\n#define B 2\n#define A 3\nA B\n", "3 2\n",
             config=config)


def test_undef_frees_capacity():
    config = Config(max_defines=1)
    run_case("#define A 1\n#undef A\n#define B 2\nA B\n", "A 2\n",
             config=config)


@pytest.mark.parametrize("name", ["x", "_private", "Light2", "MAX_LIGHTS"])
def test_identifier_shapes(name):
    run_case(f"#define {name} 7\n{name};\n", "7;\n")
