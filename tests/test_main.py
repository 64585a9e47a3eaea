from pytest import CaptureFixture

from symtree.__main__ import main


def test_main(capsys: CaptureFixture[str]) -> None:
    """Test the demonstration entry point."""
    main()
    out, _ = capsys.readouterr()
    assert out == "Constant(value=0.0)\n0.0\n"
