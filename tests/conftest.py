from types import SimpleNamespace

import pytest

# Allow tests to import project modules without installing a package
import sys
from pathlib import Path
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from perfumesearch.search import ProviderClients

DIM = 1536


class FakeEmbeddings:
    """Stands in for AsyncOpenAI: records calls to embeddings.create()."""

    def __init__(self, error: Exception | None = None):
        self.calls = []
        self.error = error
        self.embeddings = self
        self.closed = False

    async def create(self, model: str, input: str):
        self.calls.append({"model": model, "input": input})
        if self.error is not None:
            raise self.error
        return SimpleNamespace(data=[SimpleNamespace(embedding=[0.01] * DIM)])

    async def close(self):
        self.closed = True


class FakeIndex:
    """Stands in for a pinecone Index: records query() kwargs."""

    def __init__(self, matches=None, error: Exception | None = None, response=None):
        self.calls = []
        self.error = error
        self.response = response if response is not None else {"matches": matches or []}

    def query(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.response


def make_match(id: str, score: float | None, **metadata) -> dict:
    base = {
        "name": f"Perfume {id}",
        "brand": "Maison Test",
        "gender": "unisex",
        "rating_score": 4.2,
        "olfactory_family": "citrus",
        "notes": "bergamot, lemon, neroli, vetiver",
        "image_url": f"https://img.example/{id}.jpg",
    }
    base.update(metadata)
    return {"id": id, "score": score, "metadata": base}


@pytest.fixture
def sample_matches():
    return [
        make_match("p1", 0.8734),
        make_match("p2", 0.81, gender="male", olfactory_family="woody"),
        make_match("p3", 0.7, brand="Other House"),
    ]


@pytest.fixture
def fake_clients(sample_matches):
    return ProviderClients(embeddings=FakeEmbeddings(), index=FakeIndex(sample_matches))


class RecordingProviders:
    """Replaces the AsyncOpenAI and Pinecone constructors inside perfumesearch.search."""

    def __init__(self, matches=None, index_error: Exception | None = None):
        self.matches = matches or []
        self.index_error = index_error
        self.openai_clients = []
        self.pinecone_keys = []
        self.index_names = []

    def openai(self, api_key: str):
        client = FakeEmbeddings()
        client.api_key = api_key
        self.openai_clients.append(client)
        return client

    def pinecone(self, api_key: str):
        self.pinecone_keys.append(api_key)
        return SimpleNamespace(Index=self._index)

    def _index(self, name: str):
        self.index_names.append(name)
        if self.index_error is not None:
            raise self.index_error
        return FakeIndex(self.matches)


@pytest.fixture
def providers(monkeypatch, sample_matches):
    recorder = RecordingProviders(sample_matches)
    monkeypatch.setattr("perfumesearch.search.AsyncOpenAI", recorder.openai)
    monkeypatch.setattr("perfumesearch.search.Pinecone", recorder.pinecone)
    return recorder
