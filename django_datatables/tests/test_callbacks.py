from django.test import SimpleTestCase

from django_datatables.callbacks import dumps_config, render_callback
from django_datatables.exceptions import InvalidArgumentError


class CallbackTests(SimpleTestCase):
    def test_body_is_wrapped(self):
        self.assertEqual(
            render_callback("createdCell", "td.title = cellData;"),
            "function (td, cellData, rowData, row, col) {\ntd.title = cellData;\n}",
        )

    def test_params_render_template(self):
        js = render_callback("createdCell", {"class_name": "hot", "attrs": {"data-x": "1"}})
        self.assertTrue(js.startswith("function (td, cellData, rowData, row, col) {"))
        self.assertIn('td.classList.add("hot");', js)
        self.assertIn('td.setAttribute("data\\u002Dx", "1");', js)

    def test_unknown_callback(self):
        with self.assertRaises(InvalidArgumentError):
            render_callback("render", "return data;")

    def test_dumps_config_inlines_callbacks(self):
        encoded = dumps_config(
            {
                "columns": [
                    {"name": "a", "createdCell": "td.id = row;"},
                    {"name": "b", "title": "</script>"},
                ]
            }
        )
        self.assertIn('"createdCell": function (td, cellData, rowData, row, col) {\ntd.id = row;\n}', encoded)
        self.assertNotIn("</script>", encoded)
        self.assertIn("\\u003C/script\\u003E", encoded)
