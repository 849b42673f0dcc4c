from dishbook.models import Category, Dish
from dishbook.rendering import format_dish_detail, format_dish_label, group_by_category


def test_group_by_category_fixed_order_and_relative_order(photo: bytes) -> None:
    starter = Dish(name="Caprese", photo=photo, category=Category.ANTIPASTO)
    first_primo = Dish(name="Amatriciana", photo=photo, category=Category.PRIMO)
    main = Dish(name="Saltimbocca", photo=photo, category=Category.SECONDO)
    second_primo = Dish(name="Pesto", photo=photo, category=Category.PRIMO)

    groups = group_by_category([starter, first_primo, main, second_primo])

    assert [category for category, _ in groups] == [Category.ANTIPASTO, Category.PRIMO, Category.SECONDO]
    assert groups[1][1] == [first_primo, second_primo]
    assert groups[0][1] == [starter]
    assert groups[2][1] == [main]


def test_group_by_category_keeps_empty_groups() -> None:
    assert group_by_category([]) == [(Category.ANTIPASTO, []), (Category.PRIMO, []), (Category.SECONDO, [])]


def test_dish_label_includes_description(photo: bytes) -> None:
    dish = Dish(name="Panzanella", photo=photo, description="Tuscan bread salad")

    assert format_dish_label(dish).plain == "Panzanella  Tuscan bread salad"


def test_dish_detail_lists_every_field(photo: bytes) -> None:
    dish = Dish(
        name="Cacio e pepe",
        photo=photo,
        description="Roman classic",
        recipe="Toss pasta with pecorino and pepper.",
        category=Category.PRIMO,
        duration="15 min",
        difficulty="medium",
    )

    plain = format_dish_detail(dish).plain

    for expected in ("JPEG 8x6", "Cacio e pepe", "Roman classic", "Recipe", "pecorino", "Primo", "15 min", "medium"):
        assert expected in plain
