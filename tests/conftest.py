"""Shared test fixtures."""

import gzip
from pathlib import Path
import sys

import pytest


REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from fts.posting import Document  # noqa: E402


SAMPLE_XML = """<?xml version="1.0" encoding="utf-8"?>
<feed>
<doc>
<title>Wikipedia: Donut</title>
<url>https://en.wikipedia.org/wiki/Donut</url>
<abstract>A donut on a glass plate. Only the donuts.</abstract>
<links><sublink linktype="nav"><anchor>History</anchor></sublink></links>
</doc>
<doc>
<title>Wikipedia: Donut (disambiguation)</title>
<url>https://en.wikipedia.org/wiki/Donut_(disambiguation)</url>
<abstract>donut is a donut</abstract>
</doc>
<doc>
<title>Wikipedia: Wildcat</title>
<url>https://en.wikipedia.org/wiki/Wildcat</url>
<abstract>The wildcat is a small wild cat.</abstract>
</doc>
</feed>
"""


@pytest.fixture
def donut_docs():
    return [
        Document(id=0, text="A donut on a glass plate. Only the donuts."),
        Document(id=1, text="donut is a donut"),
    ]


@pytest.fixture
def corpus_path(tmp_path):
    """A three-document gzip abstract dump."""
    path = tmp_path / "abstract.xml.gz"
    with gzip.open(path, "wt", encoding="utf-8") as f:
        f.write(SAMPLE_XML)
    return path


@pytest.fixture
def index_path(tmp_path):
    return tmp_path / "cache" / "enwiki.idx"
