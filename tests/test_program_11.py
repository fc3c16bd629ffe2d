from pathlib import Path

import pytest

from runel.__main__ import main

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_11_unbound_variable(capsys):
    with pytest.raises(SystemExit) as exc:
        main([str(EXAMPLES / 'program_11.runel')])
    assert exc.value.code == 1
    captured = capsys.readouterr()
    assert captured.out == ''
    assert captured.err.strip() == "Error: line 2: RuntimeError: variable 'x' not found"
