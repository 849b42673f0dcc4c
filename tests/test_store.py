import json
from pathlib import Path

import pytest

from dishbook.models import Category, Dish
from dishbook.persistence import read_slot, write_slot
from dishbook.store import DishStore, decode_dishes, encode_dishes


def test_encode_decode_keeps_ids_fields_and_order(photo: bytes) -> None:
    dishes = [
        Dish(name="Carbonara", photo=photo, recipe="Guanciale, eggs", category=Category.PRIMO, duration="20 min"),
        Dish(name="Bruschetta", photo=b"\x00\xffraw", category=Category.ANTIPASTO, difficulty="easy"),
        Dish(name="Ossobuco", photo=photo, description="Milanese", category=Category.SECONDO),
    ]

    decoded = decode_dishes(encode_dishes(dishes))

    assert decoded == dishes
    assert [d.id for d in decoded] == [d.id for d in dishes]


def test_encoding_is_field_tagged(bruschetta: Dish) -> None:
    raw = json.loads(encode_dishes([bruschetta]))

    assert raw == [
        {
            "id": bruschetta.id,
            "name": "Bruschetta",
            "photo": bruschetta.to_dict()["photo"],
            "description": "",
            "recipe": "",
            "category": "Antipasto",
            "duration": "",
            "difficulty": "",
        }
    ]


@pytest.mark.parametrize(
    "blob",
    (
        b"not json",
        b'{"id": "x"}',
        b'[{"id": "x", "name": "n"}]',
        b'[{"id": "x", "name": "n", "photo": "@@", "description": "", "recipe": "",'
        b' "category": "Antipasto", "duration": "", "difficulty": ""}]',
        b'[{"id": "x", "name": "n", "photo": "", "description": "", "recipe": "",'
        b' "category": "Dolce", "duration": "", "difficulty": ""}]',
        b"\xff\xfe",
        b"[" * 100000,
    ),
)
def test_decode_rejects_malformed_blobs(blob: bytes) -> None:
    with pytest.raises(ValueError):
        decode_dishes(blob)


def test_load_with_no_slot_is_empty(store: DishStore) -> None:
    assert store.load() == []
    assert store.dishes == ()


def test_add_persist_load_in_fresh_store(db_path: Path, store: DishStore, bruschetta: Dish) -> None:
    store.add(bruschetta)
    assert len(store.dishes) == 1

    fresh = DishStore(db_path)
    loaded = fresh.load()

    assert len(loaded) == 1
    assert loaded[0] == bruschetta
    assert loaded[0].photo == bruschetta.photo


def test_persist_overwrites_whole_collection(db_path: Path, store: DishStore, photo: bytes) -> None:
    first = Dish(name="Arancini", photo=photo)
    second = Dish(name="Lasagne", photo=photo, category=Category.PRIMO)
    store.add(first)
    store.add(second)

    assert decode_dishes(read_slot("Dishes", db_path)) == [first, second]


def test_load_undecodable_slot_empties_collection(db_path: Path, store: DishStore, bruschetta: Dish) -> None:
    store.add(bruschetta)
    write_slot("Dishes", b"garbage", db_path)

    assert store.load() == []
    assert store.dishes == ()


def test_add_rejects_duplicate_id(store: DishStore, bruschetta: Dish) -> None:
    store.add(bruschetta)

    with pytest.raises(ValueError):
        store.add(bruschetta)
    assert len(store.dishes) == 1


def test_persist_failure_is_not_raised(tmp_path: Path, bruschetta: Dish) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("a file, not a directory")
    store = DishStore(blocker / "dishbook.db")

    store.add(bruschetta)

    assert store.persist() is False
    assert store.dishes == (bruschetta,)


def test_listeners_notified_on_add_and_load(store: DishStore, bruschetta: Dish) -> None:
    calls: list[int] = []
    unsubscribe = store.subscribe(lambda: calls.append(len(store.dishes)))

    store.add(bruschetta)
    store.load()
    unsubscribe()
    store.load()

    assert calls == [1, 1]


def test_dishes_in_category_keeps_collection_order(store: DishStore, photo: bytes) -> None:
    a = Dish(name="Gnocchi", photo=photo, category=Category.PRIMO)
    b = Dish(name="Tagliata", photo=photo, category=Category.SECONDO)
    c = Dish(name="Risotto", photo=photo, category=Category.PRIMO)
    for dish in (a, b, c):
        store.add(dish)

    assert store.dishes_in(Category.PRIMO) == [a, c]
    assert store.dishes_in(Category.ANTIPASTO) == []


def test_decode_rejects_repeated_id(bruschetta: Dish) -> None:
    with pytest.raises(ValueError):
        decode_dishes(encode_dishes([bruschetta, bruschetta]))


def test_load_slot_with_repeated_id_empties_collection(db_path: Path, store: DishStore, bruschetta: Dish) -> None:
    write_slot("Dishes", encode_dishes([bruschetta, bruschetta]), db_path)

    assert store.load() == []
    assert store.dishes == ()


def test_load_deeply_nested_slot_empties_collection(db_path: Path, store: DishStore) -> None:
    write_slot("Dishes", b"[" * 100000, db_path)

    assert store.load() == []


def test_add_persists_before_listener_failure(db_path: Path, store: DishStore, bruschetta: Dish) -> None:
    def broken_listener() -> None:
        raise RuntimeError("render failed")

    store.subscribe(broken_listener)
    with pytest.raises(RuntimeError):
        store.add(bruschetta)

    assert DishStore(db_path).load() == [bruschetta]
