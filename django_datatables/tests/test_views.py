import json
from io import StringIO

from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser
from django.core.management import call_command
from django.core.management.base import CommandError
from django.template import Context, Template
from django.test import RequestFactory, SimpleTestCase, TestCase
from django.urls import reverse

from django_datatables.controller import DataTableController
from django_datatables.exceptions import TableNotFound
from django_datatables.tables import DataTable, get_registry, get_table, table_registry
from django_datatables.tables.registry import TableRegistry
from testproject.testapp.models import Category, Product
from testproject.testapp.tables import CategoriesTable, ProductsTable


class RegistryTests(SimpleTestCase):
    def test_settings_entry_point_registered_tables(self):
        self.assertIsInstance(table_registry.get("products"), ProductsTable)
        self.assertIsInstance(table_registry.get("categories"), CategoriesTable)

    def test_register_rules(self):
        registry = TableRegistry()
        registry.register(ProductsTable)
        with self.assertRaises(ValueError):
            registry.register(ProductsTable())
        with self.assertRaises(TypeError):
            registry.register(object())

        class NoModel(DataTable):
            id = "no-model"

            def configure_columns(self, columns):
                pass

        with self.assertRaises(ValueError):
            registry.register(NoModel)
        with self.assertRaises(TableNotFound):
            registry.get("missing")
        registry.unregister("products")
        self.assertEqual(registry.all(), {})

    def test_module_level_lookups(self):
        self.assertIs(get_table("products"), table_registry.get("products"))
        tables = get_registry()
        self.assertIn("categories", tables)
        tables.pop("categories")
        self.assertIn("categories", get_registry())
        with self.assertRaises(TableNotFound):
            get_table("missing")


class ControllerTests(TestCase):
    def test_server_side_config(self):
        request = RequestFactory().get("/")
        config = DataTableController(ProductsTable()).build_config(request)
        self.assertTrue(config["serverSide"])
        self.assertEqual(config["ajax"]["url"], reverse("datatables:table_data", args=["products"]))
        self.assertEqual(config["pageLength"], 25)
        self.assertEqual(config["lengthMenu"], [10, 25, 50, 100])
        self.assertEqual(config["columnDefs"], [{"contentPadding": "mmm", "targets": "_all"}])
        self.assertEqual(config["columns"][1], {"name": "category.name", "title": "Category", "type": "string"})

    def test_client_side_config_embeds_rows(self):
        Category.objects.create(name="Tools")
        config = DataTableController(CategoriesTable()).build_config(RequestFactory().get("/"))
        self.assertNotIn("serverSide", config)
        self.assertEqual(len(config["data"]), 1)
        self.assertEqual(config["data"][0][1], "Tools")
        self.assertEqual(config["columns"][1]["orderSequence"], ["desc", "asc"])


class ViewTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.user = get_user_model().objects.create_user(username="viewer", password="pass")
        Product.objects.create(name="Hammer")

    def test_unknown_table_is_404(self):
        self.client.force_login(self.user)
        response = self.client.get(reverse("datatables:table_data", args=["missing"]))
        self.assertEqual(response.status_code, 404)

    def test_login_required(self):
        response = self.client.get(reverse("datatables:table_data", args=["products"]))
        self.assertEqual(response.status_code, 302)
        self.assertIn("/accounts/login/", response["Location"])

    def test_public_table(self):
        response = self.client.get(reverse("datatables:render_table", args=["categories"]))
        self.assertEqual(response.status_code, 200)

    def test_data_endpoint(self):
        self.client.force_login(self.user)
        response = self.client.get(
            reverse("datatables:table_data", args=["products"]), {"draw": "4", "start": "0", "length": "10"}
        )
        self.assertEqual(response.status_code, 200)
        payload = response.json()
        self.assertEqual(payload["draw"], 4)
        self.assertEqual(payload["recordsTotal"], 1)
        self.assertEqual(payload["data"][0][0], "Hammer")

    def test_render_table(self):
        self.client.force_login(self.user)
        response = self.client.get(reverse("datatables:render_table", args=["products"]))
        self.assertEqual(response.status_code, 200)
        content = response.content.decode()
        self.assertIn('id="dt-products-table"', content)
        self.assertIn("<th>Category</th>", content)
        self.assertIn('"createdCell": function (td, cellData, rowData, row, col) {', content)
        self.assertIn('td.classList.add("actions");', content)

    def test_post_not_allowed(self):
        self.client.force_login(self.user)
        response = self.client.post(reverse("datatables:table_data", args=["products"]))
        self.assertEqual(response.status_code, 405)


class TemplateTagTests(TestCase):
    def test_datatable_tag(self):
        request = RequestFactory().get("/")
        html = Template('{% load datatables_tags %}{% datatables_assets %}{% datatable "categories" %}').render(
            Context({"request": request})
        )
        self.assertIn("dataTables.min.js", html)
        self.assertIn('new DataTable("#dt-categories-table"', html)
        self.assertIn("<th>Name</th>", html)

    def test_page_embedding_a_table(self):
        user = get_user_model().objects.create_user(username="page-viewer", password="pass")
        self.client.force_login(user)
        response = self.client.get(reverse("products_page"))
        self.assertEqual(response.status_code, 200)
        content = response.content.decode()
        self.assertIn("dataTables.dataTables.min.css", content)
        self.assertIn('new DataTable("#dt-products-table"', content)

    def test_login_required_table_hidden_from_anonymous_users(self):
        class PrivateProductsTable(ProductsTable):
            id = "private-products"
            server_side = False
            login_required = True

        table_registry.register(PrivateProductsTable)
        self.addCleanup(table_registry.unregister, "private-products")
        Product.objects.create(name="secret-widget")
        template = Template('{% load datatables_tags %}{% datatable "private-products" %}')

        request = RequestFactory().get("/")
        request.user = AnonymousUser()
        html = template.render(Context({"request": request}))
        self.assertNotIn("secret-widget", html)
        self.assertNotIn("new DataTable", html)

        request.user = get_user_model().objects.create_user(username="insider", password="pass")
        html = template.render(Context({"request": request}))
        self.assertIn("secret-widget", html)

    def test_login_required_table_without_request(self):
        html = Template('{% load datatables_tags %}{% datatable "products" %}').render(Context({}))
        self.assertEqual(html, "")


class CommandTests(SimpleTestCase):
    def test_dump_config(self):
        out = StringIO()
        call_command("datatables_config", "categories", stdout=out)
        config = json.loads(out.getvalue())
        self.assertEqual(config["columns"][0], {"name": "id", "title": "Id", "type": "num", "width": "10%"})

    def test_list_and_unknown(self):
        out = StringIO()
        call_command("datatables_config", stdout=out)
        self.assertIn("products\tProductsTable", out.getvalue())
        with self.assertRaises(CommandError):
            call_command("datatables_config", "missing")
