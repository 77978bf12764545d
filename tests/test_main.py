import pytest

import main


@pytest.fixture
def answers(monkeypatch):
    def doit(*values):
        replies = iter(values)
        monkeypatch.setattr('builtins.input', lambda prompt='': next(replies))
    return doit


def test_to_codewords():
    assert main.to_codewords('1110110000010001') == [0xEC, 0x11]


def test_numeric_example(answers, capsys):
    answers('01234567', 'numeric', 'm', '', 'n')
    main.main()
    out = capsys.readouterr().out
    assert 'Using Version 1-M QR Code!' in out
    assert str([16, 32, 12, 86, 97, 128] + [236, 17] * 5) in out


def test_explain_steps(answers, capsys):
    answers('AC-42', 'alphanumeric', 'H', '3', 'y', '')
    main.main()
    out = capsys.readouterr().out
    assert 'Using Version 3-H QR Code!' in out
    assert 'Step 1: Data bitstream.' in out
    assert '0010000000101' in out
    assert 'Step 2: Data codewords (bytes).' in out


def test_reprompts_on_bad_choice(answers, capsys):
    answers('hi', 'morse', 'byte', 'Z', 'L', '99', '', 'n')
    main.main()
    out = capsys.readouterr().out
    assert 'Please enter one of' in out
    assert 'Version must be a number' in out
    assert 'Using Version 1-L QR Code!' in out


def test_invalid_data(answers, capsys):
    answers('12a', 'numeric', '', '', 'n')
    main.main()
    assert 'cannot be encoded in numeric mode' in capsys.readouterr().out


def test_too_long(answers, capsys):
    answers('x' * 1300, '', 'H', '', 'n')
    main.main()
    assert 'too long' in capsys.readouterr().out


def test_non_ascii_digit_version_reprompts(answers, capsys):
    answers('hi', '', '', '²', '2', 'n')
    main.main()
    out = capsys.readouterr().out
    assert 'Version must be a number' in out
    assert 'Using Version 2-L QR Code!' in out
