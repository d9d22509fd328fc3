import pytest

from simplecalc.__main__ import main


def test_answer(capsys):
    assert main(["2+3*4"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == [
        "The arithmetic expression to be calculated: 2+3*4",
        "The answer is: 14",
    ]


def test_invalid_expression(capsys):
    assert main(["1++2"]) == 0
    assert capsys.readouterr().out.splitlines()[-1] == "Invalid expression!"


@pytest.mark.parametrize("argv", [[], [""]])
def test_no_expression(capsys, argv):
    assert main(argv) == 0
    assert capsys.readouterr().out == "No expression to calculate!\n"


def test_echo_is_truncated(capsys):
    expr = "1" * 3000
    main([expr])
    first = capsys.readouterr().out.splitlines()[0]
    assert first == "The arithmetic expression to be calculated: " + "1" * 2047


def test_precision_from_env(capsys, monkeypatch):
    monkeypatch.setenv("SIMPLECALC_PRECISION", "2")
    main(["1/3"])
    assert capsys.readouterr().out.splitlines()[-1] == "The answer is: 0.33"


def test_bad_precision_falls_back(capsys, monkeypatch):
    monkeypatch.setenv("SIMPLECALC_PRECISION", "lots")
    main(["1/3"])
    assert capsys.readouterr().out.splitlines()[-1] == "The answer is: 0.333333"
