from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.catalog.models import Category, Product

CATEGORIES = [
    ("Beverages", "Soft drinks, coffees, teas, beers, and ales"),
    ("Condiments", "Sweet and savory sauces, relishes, spreads, and seasonings"),
    ("Confections", "Desserts, candies, and sweet breads"),
    ("Dairy Products", "Cheeses"),
]

PRODUCTS = [
    ("Chai", "10 boxes x 20 bags", Decimal("18.00"), "Beverages"),
    ("Chang", "24 - 12 oz bottles", Decimal("19.00"), "Beverages"),
    ("Cola", None, Decimal("1.50"), "Beverages"),
    ("Aniseed Syrup", "12 - 550 ml bottles", Decimal("10.00"), "Condiments"),
    ("Chef Anton's Cajun Seasoning", "48 - 6 oz jars", Decimal("22.00"), "Condiments"),
    ("Grandma's Boysenberry Spread", "12 - 8 oz jars", Decimal("25.00"), "Condiments"),
    ("Pavlova", "32 - 500 g boxes", Decimal("17.45"), "Confections"),
    ("Teatime Chocolate Biscuits", "10 boxes x 12 pieces", Decimal("9.20"), "Confections"),
    ("Sir Rodney's Scones", "24 pkgs. x 4 pieces", None, "Confections"),
    ("Queso Cabrales", "1 kg pkg.", Decimal("21.00"), "Dairy Products"),
    ("Queso Manchego La Pastora", "10 - 500 g pkgs.", Decimal("38.00"), "Dairy Products"),
    ("Gorgonzola Telino", "12 - 100 g pkgs", Decimal("12.50"), "Dairy Products"),
]


class Command(BaseCommand):
    help = "Seed demo categories and products for the admin UI."

    def add_arguments(self, parser):
        parser.add_argument(
            "--reset",
            action="store_true",
            help="Delete all existing products and categories first.",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options["reset"]:
            # Products first: categories are protected while referenced.
            Product.objects.all().delete()
            Category.objects.all().delete()
            self.stdout.write("Cleared existing catalog data")

        categories = {}
        for name, description in CATEGORIES:
            category, _ = Category.objects.get_or_create(
                category_name=name, defaults={"description": description}
            )
            categories[name] = category

        created = 0
        for name, description, price, category_name in PRODUCTS:
            _, was_created = Product.objects.get_or_create(
                product_name=name,
                category=categories[category_name],
                defaults={"description": description, "price": price},
            )
            created += int(was_created)

        self.stdout.write(
            self.style.SUCCESS(
                f"Seeded {len(categories)} categories and {created} new products"
            )
        )
