"""Message catalog used by the API layer to render error kinds and success notes."""

from typing import Any, Dict, Iterable, Optional

from app.core.config import settings

MESSAGES: Dict[str, Dict[str, str]] = {
    "en": {
        # generic
        "api.response.success": "Request processed successfully",
        "validation.failed": "Validation failed",
        "error.unexpected": "An unexpected error occurred",
        "resource.duplicate": "The resource already exists",
        "resource.concurrent.update": "The resource was modified concurrently after {0} attempt(s), please retry",
        # customers
        "customer.created.success": "Customer created successfully",
        "customer.not.found": "Customer with id {0} not found",
        "customer.email.duplicate": "Email {0} is already registered",
        # products
        "product.created.success": "Product created successfully",
        "product.updated.success": "Product updated successfully",
        "product.deleted.success": "Product deleted successfully",
        "product.not.found": "Product with id {0} not found",
        "product.name.duplicate": "Product name {0} already exists",
        "product.food.price.exceeded": "FOOD products cannot be priced above 1,000,000",
        "product.price.update.completed.orders": "Price cannot be changed for a product with completed orders",
        "product.deactivate.pending.orders": "Product cannot be deactivated while it has pending orders",
        "product.delete.stock.not.zero": "Product can only be deleted when stock is zero (current stock: {0})",
        # orders
        "order.created.success": "Order created successfully",
        "order.paid.success": "Order paid successfully",
        "order.cancelled.success": "Order cancelled successfully",
        "order.not.found": "Order with id {0} not found",
        "order.product.not.active": "Product {0} is not active",
        "order.insufficient.stock": "Insufficient stock for product {0}: available {1}, requested {2}",
        "order.pay.invalid.status": "Order cannot be paid from status {0}",
        "order.cancel.invalid.status": "Order cannot be cancelled from status {0}",
        "order.concurrent.update": "The order could not be processed due to concurrent updates after {0} attempt(s), please retry",
    },
    "id": {
        "api.response.success": "Permintaan berhasil diproses",
        "validation.failed": "Validasi gagal",
        "error.unexpected": "Terjadi kesalahan yang tidak terduga",
        "resource.duplicate": "Data sudah ada",
        "resource.concurrent.update": "Data diubah secara bersamaan setelah {0} percobaan, silakan coba lagi",
        "customer.created.success": "Pelanggan berhasil dibuat",
        "customer.not.found": "Pelanggan dengan id {0} tidak ditemukan",
        "customer.email.duplicate": "Email {0} sudah terdaftar",
        "product.created.success": "Produk berhasil dibuat",
        "product.updated.success": "Produk berhasil diperbarui",
        "product.deleted.success": "Produk berhasil dihapus",
        "product.not.found": "Produk dengan id {0} tidak ditemukan",
        "product.name.duplicate": "Nama produk {0} sudah ada",
        "product.food.price.exceeded": "Harga produk FOOD tidak boleh melebihi 1.000.000",
        "product.price.update.completed.orders": "Harga tidak dapat diubah untuk produk yang memiliki pesanan selesai",
        "product.deactivate.pending.orders": "Produk tidak dapat dinonaktifkan selama masih ada pesanan tertunda",
        "product.delete.stock.not.zero": "Produk hanya dapat dihapus jika stok nol (stok saat ini: {0})",
        "order.created.success": "Pesanan berhasil dibuat",
        "order.paid.success": "Pesanan berhasil dibayar",
        "order.cancelled.success": "Pesanan berhasil dibatalkan",
        "order.not.found": "Pesanan dengan id {0} tidak ditemukan",
        "order.product.not.active": "Produk {0} tidak aktif",
        "order.insufficient.stock": "Stok produk {0} tidak mencukupi: tersedia {1}, diminta {2}",
        "order.pay.invalid.status": "Pesanan tidak dapat dibayar dari status {0}",
        "order.cancel.invalid.status": "Pesanan tidak dapat dibatalkan dari status {0}",
        "order.concurrent.update": "Pesanan tidak dapat diproses karena pembaruan bersamaan setelah {0} percobaan, silakan coba lagi",
    },
}


def resolve_message(key: str, args: Iterable[Any] = (), locale: Optional[str] = None) -> str:
    """
    Render `key` for `locale`, falling back to the default locale and then to
    the key itself.
    """
    catalog = MESSAGES.get(locale or settings.DEFAULT_LOCALE) or MESSAGES[settings.DEFAULT_LOCALE]
    template = catalog.get(key) or MESSAGES[settings.DEFAULT_LOCALE].get(key)
    if template is None:
        return key
    try:
        return template.format(*args)
    except IndexError:
        return template
