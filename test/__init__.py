""" Test package for the chord speller. __init__.py loads common test resources. """

import json
import os

from chord_speller.resource.components import ChordData

_tables_path = os.path.join(os.path.dirname(__file__), "data", "tables.json")
with open(_tables_path, encoding='utf-8') as fp:
    TEST_TABLES = {k: ChordData.from_json(v) for k, v in json.load(fp).items()}
del _tables_path

DEMO_TABLE_DIR = os.path.join(os.path.dirname(__file__), "..", "chord_speller", "assets")
DEMO_WORDS = ["that", "cats", "sheets", "hoots", "strings", "tea", "pots", "shed"]
