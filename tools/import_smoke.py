import importlib
mods = [
  "rosterscan.scan.parser",
  "rosterscan.scan.anchors",
  "rosterscan.scan.bands",
  "rosterscan.sources.pdf_text",
  "rosterscan.sources.ocr",
  "rosterscan.headless",
]
for m in mods:
    importlib.import_module(m)
print("IMPORT_OK")
