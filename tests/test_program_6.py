from pathlib import Path
from runel.__main__ import main

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_6_bar(capsys):
    main([str(EXAMPLES / 'program_6.runel')])
    out = capsys.readouterr().out.strip()
    assert out == 'String("===3")'
