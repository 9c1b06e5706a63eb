from datetime import datetime, timezone

import pytest

from matharena.data.loader import normalize_participants


class FakeDocument:
    def __init__(self, doc_id, data):
        self.id = doc_id
        self._data = data

    def to_dict(self):
        return dict(self._data) if self._data is not None else None


class FakeCollection:
    def __init__(self, documents, error=None):
        self._documents = documents
        self._error = error

    def stream(self):
        if self._error is not None:
            raise self._error
        return iter(self._documents)


class FakeClient:
    """Stands in for google.cloud.firestore.Client (read-only collection streaming)."""

    def __init__(self, documents=None, error=None):
        self.documents = documents or []
        self.error = error
        self.requested = []

    def collection(self, name):
        self.requested.append(name)
        return FakeCollection(self.documents, self.error)


@pytest.fixture
def sample_records():
    return [
        {
            "id": "p1",
            "participant": "Ana Popescu",
            "institutia": "Colegiul Național Mihai Eminescu",
            "localitate": "Iași",
            "coordonator": "Prof. Ionescu",
            "clasa": "a VII-a",
            "categorie": "Locul 1",
            "puncte": 25,
            "link": "https://example.org/ana",
            "timestamp": datetime(2025, 3, 1, 10, 30, tzinfo=timezone.utc),
        },
        {
            "id": "p2",
            "participant": "Bogdan Marin",
            "institutia": "Liceul Teoretic Ștefan cel Mare",
            "localitate": "Suceava",
            "categorie": "Premiul Mare",
            "puncte": 35,
        },
        {
            "id": "p3",
            "participant": "Ștefan Radu",
            "institutia": "Școala Gimnazială nr. 5",
            "localitate": "Cluj-Napoca",
            "coordonator": "Prof. Ana Vasile",
            "categorie": "Mențiune",
            "puncte": 12,
        },
        {
            "id": "p4",
            "participant": "Cristina Dobre",
            "localitate": "București",
            "categorie": "Locul 3",
        },
    ]


@pytest.fixture
def participants(sample_records):
    return normalize_participants(sample_records)


@pytest.fixture
def scenario_participants():
    return normalize_participants([
        {"id": "a", "participant": "Ana", "categorie": "Locul 1", "puncte": 25},
        {"id": "b", "participant": "Bogdan", "categorie": "Premiul Mare", "puncte": 35},
    ])


@pytest.fixture
def fake_client(sample_records):
    docs = [FakeDocument(r["id"], {k: v for k, v in r.items() if k != "id"}) for r in sample_records]
    return FakeClient(docs)
