from io import StringIO

from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.test import TestCase

from authentication.models import Seller, UserRole
from marketplace.management.commands.populate_sample_data import DEMO_USERS, SAMPLE_PRODUCTS
from marketplace.models import Product

User = get_user_model()


class PopulateSampleDataCommandTest(TestCase):
    def run_command(self, *args):
        out = StringIO()
        call_command("populate_sample_data", *args, stdout=out, stderr=StringIO())
        return out.getvalue()

    def assert_demo_data(self):
        self.assertEqual(User.objects.count(), len(DEMO_USERS))
        self.assertEqual(UserRole.objects.count(), len(DEMO_USERS))
        self.assertEqual(Seller.objects.count(), 1)
        self.assertEqual(Product.objects.count(), len(SAMPLE_PRODUCTS))

    def test_creates_accounts_roles_and_catalog(self):
        output = self.run_command()

        self.assert_demo_data()
        for spec in DEMO_USERS:
            user = User.objects.get(email=spec["email"])
            self.assertTrue(UserRole.objects.filter(user=user, role=spec["role"]).exists())
            self.assertTrue(user.check_password("password123"))

        seller = User.objects.get(email="seller@example.com")
        self.assertEqual(Seller.objects.get().user, seller)
        self.assertFalse(Product.objects.exclude(seller=seller).exists())
        self.assertIn(f"{len(SAMPLE_PRODUCTS)} new products", output)

    def test_running_twice_changes_nothing(self):
        self.run_command()
        product_ids = set(Product.objects.values_list("id", flat=True))

        output = self.run_command()

        self.assert_demo_data()
        self.assertEqual(set(Product.objects.values_list("id", flat=True)), product_ids)
        self.assertIn("- 0 new products", output)

    def test_clear_recreates_the_catalog(self):
        self.run_command()
        product_ids = set(Product.objects.values_list("id", flat=True))

        self.run_command("--clear")

        self.assert_demo_data()
        self.assertFalse(product_ids & set(Product.objects.values_list("id", flat=True)))
