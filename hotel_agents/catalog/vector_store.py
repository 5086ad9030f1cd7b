"""
In-memory hotel catalog with toy similarity search.

Rooms are loaded from a static CSV and embedded with a hashed
bag-of-words vector, which is enough to rank rooms by keyword overlap
with a query. It is not a semantic embedding model.
"""

import csv
import hashlib
import json
import logging
import math
import re
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from pydantic import BaseModel, Field

from hotel_agents.shared.contracts import ProviderListing


logger = logging.getLogger(__name__)

EMBEDDING_DIMENSIONS = 384

DEFAULT_CSV_PATH = Path(__file__).parent / "data" / "hotel-rooms.csv"

_TOKEN_PATTERN = re.compile(r"[a-z0-9]+")


class CatalogEntry(ProviderListing):
    """A catalog room with its search text and embedding."""

    text_representation: str = ""
    embedding: List[float] = Field(default_factory=list, exclude=True)


class SearchCriteria(BaseModel):
    """Structured filters for catalog search. Unset fields do not filter."""

    query: Optional[str] = None
    location: Optional[str] = None
    max_price: Optional[float] = Field(default=None, gt=0)
    min_rating: Optional[float] = Field(default=None, ge=0, le=5)
    amenities: Optional[List[str]] = None
    room_type: Optional[str] = None

    def is_empty(self) -> bool:
        return all(value in (None, "", []) for value in self.model_dump().values())


def hash_file(path: Path) -> str:
    return hashlib.sha256(path.read_bytes()).hexdigest()


def create_text_representation(room: ProviderListing) -> str:
    return (
        f"{room.hotel_name} {room.room_type} {room.description} "
        f"{' '.join(room.amenities)} {room.location} {room.provider} "
        f"{room.rating} stars {room.price:g} {room.currency}"
    ).lower()


def generate_embedding(text: str, dimensions: int = EMBEDDING_DIMENSIONS) -> List[float]:
    """Hash each token into a bucket and count; deterministic across runs."""
    vector = [0.0] * dimensions
    for token in _TOKEN_PATTERN.findall(text.lower()):
        bucket = int(hashlib.md5(token.encode("utf-8")).hexdigest(), 16) % dimensions
        vector[bucket] += 1.0
    return vector


def cosine_similarity(vec_a: Sequence[float], vec_b: Sequence[float]) -> float:
    dot = sum(a * b for a, b in zip(vec_a, vec_b))
    magnitude_a = math.sqrt(sum(a * a for a in vec_a))
    magnitude_b = math.sqrt(sum(b * b for b in vec_b))
    if magnitude_a == 0 or magnitude_b == 0:
        return 0.0
    return dot / (magnitude_a * magnitude_b)


def load_rooms(csv_path: Path) -> List[ProviderListing]:
    """Read catalog rooms from CSV; amenities are ';'-separated."""
    rooms = []
    with open(csv_path, "r", encoding="utf-8", newline="") as f:
        for row in csv.DictReader(f):
            if not row.get("id"):
                continue
            rooms.append(
                ProviderListing(
                    id=row["id"],
                    hotel_name=row["hotel_name"],
                    room_type=row["room_type"],
                    price=float(row["price"]),
                    currency=row["currency"],
                    description=row["description"],
                    amenities=[a.strip() for a in row["amenities"].split(";") if a.strip()],
                    provider=row["provider"],
                    rating=float(row["rating"]),
                    location=row["location"],
                    availability=row["availability"].strip().lower() == "true",
                )
            )
    return rooms


def filter_entries(entries: Sequence[CatalogEntry], criteria: SearchCriteria) -> List[CatalogEntry]:
    """Apply every set criterion; matching is case-insensitive substring."""
    filtered = list(entries)

    if criteria.location:
        location = criteria.location.lower()
        filtered = [e for e in filtered if location in e.location.lower()]

    if criteria.max_price is not None:
        filtered = [e for e in filtered if e.price <= criteria.max_price]

    if criteria.min_rating is not None:
        filtered = [e for e in filtered if e.rating >= criteria.min_rating]

    if criteria.amenities:
        wanted = [a.lower() for a in criteria.amenities if a.strip()]
        filtered = [
            e for e in filtered
            if any(w in a.lower() for w in wanted for a in e.amenities)
        ]

    if criteria.room_type:
        room_type = criteria.room_type.lower()
        filtered = [e for e in filtered if room_type in e.room_type.lower()]

    return filtered


class HotelCatalog:
    """
    Hotel rooms loaded lazily from CSV and searchable by similarity.

    When embeddings_path is set, embeddings are cached there as JSON keyed
    on the CSV's SHA-256 and regenerated when the CSV changes.
    """

    def __init__(
        self,
        csv_path: Path = DEFAULT_CSV_PATH,
        embeddings_path: Optional[Path] = None,
    ):
        self.csv_path = Path(csv_path)
        self.embeddings_path = Path(embeddings_path) if embeddings_path else None
        self._entries: List[CatalogEntry] = []
        self._initialized = False

    def _load_cached_embeddings(self, csv_hash: str) -> Optional[Dict[str, List[float]]]:
        if not self.embeddings_path or not self.embeddings_path.exists():
            return None
        try:
            cached = json.loads(self.embeddings_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to load cached embeddings, will regenerate: {e}")
            return None
        if cached.get("csv_hash") != csv_hash:
            logger.info("Catalog CSV changed, regenerating embeddings")
            return None
        return cached.get("vectors", {})

    def _save_embeddings(self, csv_hash: str) -> None:
        if not self.embeddings_path:
            return
        payload = {
            "csv_hash": csv_hash,
            "vectors": {entry.id: entry.embedding for entry in self._entries},
        }
        self.embeddings_path.write_text(json.dumps(payload), encoding="utf-8")

    def initialize(self) -> None:
        if self._initialized:
            return

        csv_hash = hash_file(self.csv_path)
        cached = self._load_cached_embeddings(csv_hash)

        entries = []
        for room in load_rooms(self.csv_path):
            text = create_text_representation(room)
            embedding = cached.get(room.id) if cached else None
            entries.append(
                CatalogEntry(
                    **room.model_dump(),
                    text_representation=text,
                    embedding=embedding or generate_embedding(text),
                )
            )
        self._entries = entries

        if cached is None:
            self._save_embeddings(csv_hash)

        self._initialized = True
        logger.info(
            f"Catalog loaded | rooms={len(self._entries)}, "
            f"embeddings={'cached' if cached else 'generated'}"
        )

    @property
    def entries(self) -> List[CatalogEntry]:
        self.initialize()
        return list(self._entries)

    def get(self, entry_id: str) -> Optional[CatalogEntry]:
        for entry in self.entries:
            if entry.id == entry_id:
                return entry
        return None

    def search(self, query: str, limit: int = 5) -> List[CatalogEntry]:
        """Rooms most similar to the query, best first."""
        query_embedding = generate_embedding(query)
        scored = [
            (cosine_similarity(query_embedding, entry.embedding), entry)
            for entry in self.entries
        ]
        # sorted() is stable, so equal scores keep catalog order
        scored = sorted(scored, key=lambda pair: pair[0], reverse=True)
        return [entry for _, entry in scored[:limit]]

    def search_by_criteria(self, criteria: SearchCriteria) -> List[CatalogEntry]:
        return filter_entries(self.entries, criteria)
