"""
Django management command to populate the marketplace with sample data
Usage: python manage.py populate_sample_data [--clear]

Creates the demo client, seller and admin accounts and a catalog of car parts.
Running it twice leaves the data unchanged.
"""

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction

from authentication.models import UserRole
from infrastructure.container import container
from marketplace.models import Product

User = get_user_model()

DEMO_PASSWORD = "password123"

DEMO_USERS = [
    {"name": "John Doe", "email": "client@example.com", "role": UserRole.CLIENT},
    {"name": "Jane Smith", "email": "seller@example.com", "role": UserRole.SELLER},
    {"name": "Admin User", "email": "admin@example.com", "role": UserRole.ADMIN},
]

SAMPLE_PRODUCTS = [
    {
        "title": "Performance Air Filter",
        "description": "High-flow air filter for increased horsepower and acceleration. "
        "Washable and reusable for long service life.",
        "price": Decimal("49.99"),
        "keywords": ["air filter", "performance", "engine", "intake"],
        "image_url": "https://images.unsplash.com/photo-1485827404703-89b55fcc595e",
    },
    {
        "title": "Ceramic Brake Pads Set",
        "description": "Premium ceramic brake pads for reduced noise and dust. "
        "Superior stopping power and long-lasting performance.",
        "price": Decimal("79.99"),
        "keywords": ["brakes", "ceramic", "pads", "safety"],
        "image_url": "https://images.unsplash.com/photo-1486312338219-ce68d2c6f44d",
    },
    {
        "title": "LED Headlight Conversion Kit",
        "description": "Upgrade to energy-efficient LED headlights with this easy-to-install conversion kit.",
        "price": Decimal("129.99"),
        "keywords": ["LED", "headlights", "lighting", "conversion"],
        "image_url": "https://images.unsplash.com/photo-1519389950473-47ba0277781c",
    },
    {
        "title": "Synthetic Motor Oil 5W-30",
        "description": "Full synthetic motor oil for superior engine protection under extreme conditions.",
        "price": Decimal("32.99"),
        "keywords": ["oil", "synthetic", "engine", "lubrication"],
        "image_url": "https://images.unsplash.com/photo-1581090464777-f3220bbe1b8b",
    },
    {
        "title": "Performance Exhaust System",
        "description": "Stainless steel performance exhaust system for enhanced sound and power.",
        "price": Decimal("349.99"),
        "keywords": ["exhaust", "performance", "stainless steel", "sound"],
        "image_url": "https://images.unsplash.com/photo-1487058792275-0ad4aaf24ca7",
    },
    {
        "title": "Heavy Duty Car Battery",
        "description": "Maintenance-free car battery with high cold cranking amps for reliable starting.",
        "price": Decimal("119.99"),
        "keywords": ["battery", "power", "starting", "electrical"],
        "image_url": "https://images.unsplash.com/photo-1498050108023-c5249f4df085",
    },
    {
        "title": "Alloy Wheel Set 18-inch",
        "description": "Lightweight alloy wheels for improved handling and aesthetics. Set of four.",
        "price": Decimal("599.99"),
        "keywords": ["wheels", "alloy", "rims", "18-inch"],
        "image_url": "https://images.unsplash.com/photo-1581092795360-fd1ca04f0952",
    },
    {
        "title": "Shock Absorber Kit",
        "description": "Gas-charged shock absorbers for improved ride comfort and handling. Set of four.",
        "price": Decimal("249.99"),
        "keywords": ["suspension", "shocks", "ride quality", "handling"],
        "image_url": "https://images.unsplash.com/photo-1605810230434-7631ac76ec81",
    },
]


class Command(BaseCommand):
    help = "Populate the marketplace with demo accounts and car part products"

    def add_arguments(self, parser):
        parser.add_argument(
            "--clear",
            action="store_true",
            help="Delete the demo seller's products before populating",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        users = {spec["role"]: self.create_user(spec) for spec in DEMO_USERS}
        seller = users[UserRole.SELLER]

        if options["clear"]:
            self.stdout.write("Clearing existing products...")
            Product.objects.filter(seller=seller).delete()

        created = 0
        for data in SAMPLE_PRODUCTS:
            _, was_created = Product.objects.get_or_create(
                title=data["title"],
                seller=seller,
                defaults={key: value for key, value in data.items() if key != "title"},
            )
            created += int(was_created)

        self.stdout.write(
            self.style.SUCCESS(
                f"Successfully populated database with sample data!\n"
                f"- {len(users)} demo accounts (password: {DEMO_PASSWORD})\n"
                f"- {created} new products ({len(SAMPLE_PRODUCTS)} in the sample catalog)"
            )
        )

    def create_user(self, spec):
        user = User.objects.filter(email=spec["email"]).first()
        if user is None:
            user = User.objects.create_user(
                username=spec["email"].split("@")[0],
                email=spec["email"],
                password=DEMO_PASSWORD,
                name=spec["name"],
            )
            self.stdout.write(f"Created user {user.email}")

        result = container.seller_service().grant_role(user, spec["role"])
        if not result.success:
            self.stderr.write(f"Could not grant {spec['role']} to {user.email}: {result.error}")
        return user
