from django.db.models.functions import Upper

from django_datatables.tables import DataTable

from .models import Category, Product


class ProductsTable(DataTable):
    id = "products"
    model = Product
    options = {"pageLength": 25, "order": [[0, "asc"]]}

    def configure_columns(self, columns):
        columns.add_database_column("name").set_title("Product")
        columns.add_database_column("category.name").set_title("Category")
        columns.add_database_column("price").set_class_name("dt-right")
        columns.add_database_column("release_date")
        columns.add_expression_column("name_upper", Upper("name")).set_visible(False)
        (
            columns.add_non_database_column("actions")
            .set_orderable(False)
            .set_searchable(False)
            .callback_created_cell({"class_name": "actions", "attrs": {"data-role": "actions"}})
        )
        columns.default.set_content_padding("mmm")


class CategoriesTable(DataTable):
    id = "categories"
    model = Category
    login_required = False
    server_side = False

    def configure_columns(self, columns):
        columns.add_database_column("id").set_width("10%")
        columns.add_database_column("name").set_order_sequence(["desc", "asc"])


def register_tables(registry):
    registry.register(ProductsTable)
    registry.register(CategoriesTable)
