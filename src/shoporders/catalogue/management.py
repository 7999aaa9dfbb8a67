"""Catalogue management: commands and handlers for products and variants."""

from protean import handle
from protean.fields import Float, Identifier, Integer, String
from protean.utils.globals import current_domain

from shoporders.catalogue.product import Product, ProductVariant
from shoporders.domain import shoporders


@shoporders.command(part_of="Product")
class AddProduct:
    title: String(required=True, max_length=255)
    price: Float(required=True, min_value=0.0)


@shoporders.command(part_of="Product")
class ChangeProductPrice:
    product_id: Identifier(required=True)
    price: Float(required=True, min_value=0.0)


@shoporders.command(part_of="ProductVariant")
class AddProductVariant:
    product_id: Identifier()
    title: String(required=True, max_length=255)
    price: Float(required=True, min_value=0.0)
    min_selling_quantity: Integer(default=1, min_value=1)
    max_selling_quantity: Integer(required=True, min_value=1)
    available_stock: Integer(default=0, min_value=0)


@shoporders.command(part_of="ProductVariant")
class ChangeVariantPrice:
    variant_id: Identifier(required=True)
    price: Float(required=True, min_value=0.0)


@shoporders.command(part_of="ProductVariant")
class SetVariantStock:
    variant_id: Identifier(required=True)
    available_stock: Integer(required=True)


@shoporders.command_handler(part_of=Product)
class ProductHandler:
    @handle(AddProduct)
    def add_product(self, command):
        product = Product.add(title=command.title, price=command.price)
        current_domain.repository_for(Product).add(product)
        return str(product.id)

    @handle(ChangeProductPrice)
    def change_product_price(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.change_price(command.price)
        repo.add(product)


@shoporders.command_handler(part_of=ProductVariant)
class ProductVariantHandler:
    @handle(AddProductVariant)
    def add_variant(self, command):
        variant = ProductVariant.add(
            product_id=command.product_id,
            title=command.title,
            price=command.price,
            min_selling_quantity=command.min_selling_quantity or 1,
            max_selling_quantity=command.max_selling_quantity,
            available_stock=command.available_stock or 0,
        )
        current_domain.repository_for(ProductVariant).add(variant)
        return str(variant.id)

    @handle(ChangeVariantPrice)
    def change_variant_price(self, command):
        repo = current_domain.repository_for(ProductVariant)
        variant = repo.get(command.variant_id)
        variant.change_price(command.price)
        repo.add(variant)

    @handle(SetVariantStock)
    def set_variant_stock(self, command):
        repo = current_domain.repository_for(ProductVariant)
        variant = repo.get(command.variant_id)
        variant.set_stock(command.available_stock)
        repo.add(variant)
