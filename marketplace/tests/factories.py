import random
import uuid
from decimal import Decimal

import factory
from django.contrib.auth import get_user_model
from django.utils import timezone
from faker import Faker

from authentication.models import Seller, UserRole
from marketplace.models import Cart, CartItem, Order, Payment, Product, StorageCost

User = get_user_model()
fake = Faker()


class UserFactory(factory.django.DjangoModelFactory):
    """A plain account with no stored role, which resolves to client."""

    class Meta:
        model = User

    id = factory.LazyFunction(uuid.uuid4)
    username = factory.Sequence(lambda n: f"user_{n}")
    email = factory.Sequence(lambda n: f"user_{n}@example.com")
    name = factory.Faker("name")
    password = factory.PostGenerationMethodCall("set_password", "defaultpassword")
    is_active = True


class UserRoleFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = UserRole

    user = factory.SubFactory(UserFactory)
    role = UserRole.CLIENT


class ClientFactory(UserFactory):
    username = factory.Sequence(lambda n: f"client_{n}")
    email = factory.Sequence(lambda n: f"client_{n}@example.com")

    role = factory.RelatedFactory(UserRoleFactory, factory_related_name="user", role=UserRole.CLIENT)


class SellerFactory(UserFactory):
    """Seller account with its role row and seller directory entry."""

    username = factory.Sequence(lambda n: f"seller_{n}")
    email = factory.Sequence(lambda n: f"seller_{n}@example.com")

    role = factory.RelatedFactory(UserRoleFactory, factory_related_name="user", role=UserRole.SELLER)

    @factory.post_generation
    def directory_entry(self, create, extracted, **kwargs):
        if create:
            Seller.objects.get_or_create(
                user=self, defaults={"name": self.get_display_name(), "contact_email": self.email}
            )


class AdminFactory(UserFactory):
    username = factory.Sequence(lambda n: f"admin_{n}")
    email = factory.Sequence(lambda n: f"admin_{n}@example.com")
    is_staff = True

    role = factory.RelatedFactory(UserRoleFactory, factory_related_name="user", role=UserRole.ADMIN)


class ProductFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Product

    id = factory.LazyFunction(uuid.uuid4)
    title = factory.Sequence(lambda n: f"Product {n}")
    description = factory.Faker("paragraph", nb_sentences=3)
    price = factory.LazyFunction(lambda: Decimal(f"{random.randint(10, 500)}.00"))
    keywords = factory.LazyFunction(lambda: [fake.word(), fake.word()])
    image_url = factory.Faker("image_url")

    seller = factory.SubFactory(SellerFactory)


class CartFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Cart
        django_get_or_create = ("user",)

    user = factory.SubFactory(ClientFactory)


class CartItemFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = CartItem

    cart = factory.SubFactory(CartFactory)
    product = factory.SubFactory(ProductFactory)
    quantity = factory.Faker("random_int", min=1, max=5)


class OrderFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Order

    id = factory.LazyFunction(uuid.uuid4)
    client = factory.SubFactory(ClientFactory)
    product = factory.SubFactory(ProductFactory)
    seller = factory.SelfAttribute("product.seller")
    quantity = 1
    status = Order.PENDING
    shipping_address = factory.Faker("address")


class PaymentFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Payment

    order = factory.SubFactory(OrderFactory)
    amount = Decimal("100.00")
    cost = Decimal("60.00")
    payment_date = factory.LazyFunction(timezone.now)


class StorageCostFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = StorageCost

    product = factory.SubFactory(ProductFactory)
    cost_amount = Decimal("10.00")
    month = factory.LazyFunction(lambda: timezone.localtime().month)
    year = factory.LazyFunction(lambda: timezone.localtime().year)
