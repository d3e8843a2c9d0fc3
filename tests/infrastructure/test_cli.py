"""End-to-end tests for the CLI against a temporary catalog file."""

import pytest
from click.testing import CliRunner

from stockscan.infrastructure.bootstrap import product_repository
from stockscan.infrastructure.cli.main import cli
from stockscan.infrastructure.config import get_settings


@pytest.fixture(autouse=True)
def isolated_catalog(tmp_path, monkeypatch):
    monkeypatch.setenv("STOCKSCAN_DATA_DIR", str(tmp_path))
    get_settings.cache_clear()
    yield tmp_path
    get_settings.cache_clear()


@pytest.fixture
def runner():
    return CliRunner()


def _add(runner, *args):
    return runner.invoke(cli, ["product", "add", *args])


def _only_product():
    products = product_repository().list_all()
    assert len(products) == 1
    return products[0]


class TestProductCommands:

    def test_add_and_list(self, runner):
        result = _add(
            runner, "--name", "Apple Juice", "--barcode", "111",
            "--buy-price", "12", "--sell-price", "20", "--amount", "4",
        )
        assert result.exit_code == 0, result.output
        assert "added with ID" in result.output

        result = runner.invoke(cli, ["product", "list"])
        assert result.exit_code == 0
        assert "Apple Juice" in result.output
        assert "111" in result.output

    def test_add_without_name_fails(self, runner):
        result = _add(runner, "--buy-price", "1", "--sell-price", "2")
        assert result.exit_code == 1
        assert "Product name is required" in result.output
        assert product_repository().list_all() == []

    def test_add_zero_buy_price_reports_buy_price(self, runner):
        result = _add(runner, "--name", "Soap", "--sell-price", "2")
        assert result.exit_code == 1
        assert "Buy price must be greater than 0" in result.output

    def test_add_with_image(self, runner, tmp_path):
        photo = tmp_path / "photo.jpg"
        photo.write_bytes(b"\xff\xd8jpeg")
        result = _add(
            runner, "--name", "Soap", "--buy-price", "1", "--sell-price", "2",
            "--image", str(photo),
        )
        assert result.exit_code == 0, result.output
        assert _only_product().image == b"\xff\xd8jpeg"

    def test_list_empty(self, runner):
        result = runner.invoke(cli, ["product", "list"])
        assert "No products found." in result.output

    def test_list_search(self, runner):
        _add(runner, "--name", "Soap", "--barcode", "222", "--buy-price", "1", "--sell-price", "2")
        _add(runner, "--name", "Tea", "--barcode", "333", "--buy-price", "1", "--sell-price", "2")
        result = runner.invoke(cli, ["product", "list", "--search", "so"])
        assert "Soap" in result.output
        assert "Tea" not in result.output

    def test_show_hides_zero_offer(self, runner):
        _add(runner, "--name", "Soap", "--buy-price", "1", "--sell-price", "2")
        product = _only_product()
        result = runner.invoke(cli, ["product", "show", product.id])
        assert result.exit_code == 0
        assert "Sell Price:" in result.output
        assert "Offer Price" not in result.output
        assert "Out of Stock" in result.output

    def test_show_active_offer(self, runner):
        _add(
            runner, "--name", "Soap", "--buy-price", "5",
            "--sell-price", "10", "--offer-price", "8", "--amount", "2",
        )
        result = runner.invoke(cli, ["product", "show", _only_product().id])
        assert "Offer Price:   8 Toman" in result.output
        assert "In Stock" in result.output

    def test_show_unknown(self, runner):
        result = runner.invoke(cli, ["product", "show", "nope"])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_edit(self, runner):
        _add(runner, "--name", "Soap", "--buy-price", "1", "--sell-price", "2")
        product = _only_product()
        result = runner.invoke(
            cli, ["product", "edit", product.id, "--name", "Hand Soap", "--amount", "7"]
        )
        assert result.exit_code == 0, result.output
        updated = _only_product()
        assert updated.name == "Hand Soap"
        assert updated.amount == 7
        assert updated.id == product.id
        assert updated.created_at == product.created_at

    def test_edit_invalid_leaves_record(self, runner):
        _add(runner, "--name", "Soap", "--buy-price", "1", "--sell-price", "2")
        product = _only_product()
        result = runner.invoke(cli, ["product", "edit", product.id, "--name", ""])
        assert result.exit_code == 1
        assert "Product name is required" in result.output
        assert _only_product().name == "Soap"

    def test_edit_clear_image(self, runner, tmp_path):
        photo = tmp_path / "photo.jpg"
        photo.write_bytes(b"jpeg")
        _add(runner, "--name", "Soap", "--buy-price", "1", "--sell-price", "2", "--image", str(photo))
        result = runner.invoke(cli, ["product", "edit", _only_product().id, "--clear-image"])
        assert result.exit_code == 0, result.output
        assert _only_product().image is None

    def test_delete(self, runner):
        _add(runner, "--name", "Soap", "--buy-price", "1", "--sell-price", "2")
        product = _only_product()
        result = runner.invoke(cli, ["product", "delete", product.id, "--yes"])
        assert result.exit_code == 0
        assert product_repository().list_all() == []

    def test_delete_asks_for_confirmation(self, runner):
        _add(runner, "--name", "Soap", "--buy-price", "1", "--sell-price", "2")
        product = _only_product()
        result = runner.invoke(cli, ["product", "delete", product.id], input="n\n")
        assert result.exit_code == 1
        assert len(product_repository().list_all()) == 1


class TestScanCommand:

    def test_known_barcode_shows_product(self, runner):
        _add(runner, "--name", "Apple Juice", "--barcode", "111", "--buy-price", "1", "--sell-price", "20")
        result = runner.invoke(cli, ["scan", "--code", "111"])
        assert result.exit_code == 0, result.output
        assert "Apple Juice" in result.output
        assert "Product not found" not in result.output

    def test_unknown_barcode_declined(self, runner):
        result = runner.invoke(cli, ["scan", "--code", "222"], input="n\n")
        assert result.exit_code == 0, result.output
        assert "Scanned Barcode: 222" in result.output
        assert "Product not found" in result.output
        assert "Scan again." in result.output
        assert product_repository().list_all() == []

    def test_unknown_barcode_create(self, runner):
        answers = "y\nSoap\n0\n\n10\n15\n0\n"
        result = runner.invoke(cli, ["scan", "--code", "222"], input=answers)
        assert result.exit_code == 0, result.output
        product = _only_product()
        assert product.name == "Soap"
        assert product.barcode == "222"

        result = runner.invoke(cli, ["scan", "--code", "222"])
        assert "Soap" in result.output
        assert "Product not found" not in result.output

    def test_unknown_barcode_create_invalid(self, runner):
        answers = "y\nSoap\n0\n\n0\n15\n0\n"
        result = runner.invoke(cli, ["scan", "--code", "222"], input=answers)
        assert result.exit_code == 0
        assert "Buy price must be greater than 0" in result.output
        assert product_repository().list_all() == []

    def test_reads_codes_from_stdin(self, runner):
        _add(runner, "--name", "Apple Juice", "--barcode", "111", "--buy-price", "1", "--sell-price", "20")
        result = runner.invoke(cli, ["scan"], input="111\n")
        assert result.exit_code == 0, result.output
        assert "Apple Juice" in result.output

    def test_missing_device_reports_error(self, runner, tmp_path):
        result = runner.invoke(cli, ["scan", "--device", str(tmp_path / "missing")])
        assert result.exit_code == 0
        assert "Scanner unavailable" in result.output


class TestRobustness:

    def test_show_without_specification_uses_placeholder(self, runner):
        _add(runner, "--name", "Soap", "--buy-price", "1", "--sell-price", "2")
        result = runner.invoke(cli, ["product", "show", _only_product().id])
        assert "Specification: No specification" in result.output

    def test_show_with_specification(self, runner):
        _add(
            runner, "--name", "Soap", "--buy-price", "1", "--sell-price", "2",
            "--specification", "lavender",
        )
        result = runner.invoke(cli, ["product", "show", _only_product().id])
        assert "Specification: lavender" in result.output

    def test_whitespace_name_is_accepted(self, runner):
        result = _add(runner, "--name", "  ", "--buy-price", "1", "--sell-price", "2")
        assert result.exit_code == 0, result.output
        assert _only_product().name == "  "

    def test_undecodable_stdin_is_reported(self, runner):
        result = runner.invoke(cli, ["scan"], input=b"\xff\xfe\n")
        assert result.exit_code == 0, result.output
        assert "Unreadable scanner input" in result.output

    def test_undecodable_line_does_not_hide_good_codes(self, runner):
        _add(runner, "--name", "Apple Juice", "--barcode", "111", "--buy-price", "1", "--sell-price", "20")
        result = runner.invoke(cli, ["scan"], input=b"\xff\n111\n")
        assert result.exit_code == 0, result.output
        assert "Unreadable scanner input" in result.output
        assert "Apple Juice" in result.output

    def test_corrupt_catalog_is_reported(self, runner, isolated_catalog):
        (isolated_catalog / "products.json").write_text("{not json", encoding="utf-8")
        result = runner.invoke(cli, ["product", "list"])
        assert result.exit_code == 1
        assert "unreadable" in result.output
        assert not isinstance(result.exception, ValueError)

        result = runner.invoke(cli, ["scan", "--code", "111"])
        assert result.exit_code == 1
        assert "unreadable" in result.output
