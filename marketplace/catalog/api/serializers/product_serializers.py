from rest_framework import serializers

from marketplace.catalog.domain.models.catalog import Product
from marketplace.catalog.domain.services.filtering import parse_keywords


class ProductListSerializer(serializers.ModelSerializer):
    seller_id = serializers.UUIDField(read_only=True)
    seller_name = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = [
            "id",
            "title",
            "description",
            "price",
            "keywords",
            "image_url",
            "seller_id",
            "seller_name",
            "created_at",
        ]
        read_only_fields = fields

    def get_seller_name(self, obj) -> str:
        return obj.seller.get_display_name()


class ProductDetailSerializer(ProductListSerializer):
    related = serializers.SerializerMethodField()

    class Meta(ProductListSerializer.Meta):
        fields = ProductListSerializer.Meta.fields + ["updated_at", "related"]
        read_only_fields = fields

    def get_related(self, obj):
        related = self.context.get("related", [])
        return ProductListSerializer(related, many=True).data


class KeywordsField(serializers.Field):
    """Accepts a list of strings or a comma separated string."""

    def to_internal_value(self, data):
        if not isinstance(data, (list, str)):
            raise serializers.ValidationError("Keywords must be a list or a comma separated string.")
        return parse_keywords(data)

    def to_representation(self, value):
        return value


class ProductCreateUpdateSerializer(serializers.Serializer):
    """Input for product creation; with ``partial=True`` for updates."""

    title = serializers.CharField(max_length=200)
    description = serializers.CharField(required=False, allow_blank=True)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    keywords = KeywordsField(required=False)
    image_url = serializers.URLField(max_length=2000, required=False, allow_blank=True)
