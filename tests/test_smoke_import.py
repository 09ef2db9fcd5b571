from importlib import import_module


def test_imports_and_entry_points():
    for mod in [
        "rosterscan",
        "rosterscan.scan.parser",
        "rosterscan.sources",
        "rosterscan.sources.pdf_text",
        "rosterscan.sources.ocr",
        "rosterscan.report.txt_writer",
        "rosterscan.headless",
        "rosterscan.cli",
        "rosterscan.__main__",
    ]:
        import_module(mod)

    package = import_module("rosterscan")
    assert callable(package.parse)
    assert package.__version__
    assert hasattr(import_module("rosterscan.__main__"), "main")
