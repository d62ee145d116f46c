import ast
import pathlib

SRC = pathlib.Path(__file__).resolve().parents[2] / "src"


def _imported_modules(path: pathlib.Path):
    tree = ast.parse(path.read_text(encoding="utf-8"))
    for node in ast.walk(tree):
        if isinstance(node, ast.ImportFrom) and node.module:
            yield node.module
        if isinstance(node, ast.Import):
            for n in node.names:
                yield n.name


def test_no_infrastructure_imports_in_api():
    for api_py in SRC.glob("**/api/**/*.py"):
        for module in _imported_modules(api_py):
            if "infrastructure" in module:
                raise AssertionError(f"Infrastructure import in API file: {api_py} -> {module}")


def test_domain_depends_on_nothing_outward():
    for domain_py in SRC.glob("webhooks/domain/**/*.py"):
        for module in _imported_modules(domain_py):
            for layer in ("infrastructure", "application", ".api"):
                if layer in module:
                    raise AssertionError(f"Outward import in domain file: {domain_py} -> {module}")
