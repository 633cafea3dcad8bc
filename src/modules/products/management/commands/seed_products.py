from __future__ import annotations

from decimal import Decimal

from django.core.management.base import BaseCommand

from modules.products.models import Product

CATALOG = [
    ("fruit", "Apple", "Fresh red apple", Decimal("2.99"), "apple.jpg"),
    ("fruit", "Green Apple", "Fresh green apple", Decimal("3.49"), "green-apple.jpg"),
    ("fruit", "Banana", "Fresh banana", Decimal("1.99"), "banana.jpg"),
    ("fruit", "Orange", "Juicy orange", Decimal("2.49"), "orange.jpg"),
    ("vegetable", "Carrot", "Fresh carrot", Decimal("1.49"), "carrot.jpg"),
    ("vegetable", "Broccoli", "Green broccoli", Decimal("2.19"), "broccoli.jpg"),
    ("vegetable", "Potato", None, Decimal("0.99"), None),
    ("dairy", "Milk", "Whole milk, 1L", Decimal("1.29"), "milk.jpg"),
    ("dairy", "Cheddar", "Aged cheddar cheese", Decimal("5.99"), "cheddar.jpg"),
    ("bakery", "Sourdough", "Sourdough loaf", Decimal("4.50"), "sourdough.jpg"),
]


class Command(BaseCommand):
    help = "Seed the catalog with sample products for local development."

    def add_arguments(self, parser):
        parser.add_argument(
            "--clear",
            action="store_true",
            help="Delete every product before seeding.",
        )

    def handle(self, *args, **options):
        if options["clear"]:
            deleted, _ = Product.objects.all().delete()
            self.stdout.write(self.style.WARNING(f"Deleted {deleted} products."))

        self.stdout.write("Creating products...")
        created = 0
        for type_, name, description, price, image_url in CATALOG:
            _, was_created = Product.objects.get_or_create(
                type=type_,
                name=name,
                defaults={
                    "description": description,
                    "price": price,
                    "image_url": image_url,
                },
            )
            created += int(was_created)

        self.stdout.write(
            self.style.SUCCESS(f"Seed completed: products={created}")
        )
