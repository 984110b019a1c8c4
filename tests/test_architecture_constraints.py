"""
Tests to enforce architecture constraints and prevent regressions.

These tests verify that the layered architecture is maintained:
- Domain layer: Pure business logic, no infrastructure dependencies
- Repository layer: Data access through the injected store client
- Service layer: Orchestration, depends on domain and repository interfaces
"""

import ast
from pathlib import Path


def get_project_root() -> Path:
    """Get the project root directory."""
    # Tests are in tests/, so go up one level
    return Path(__file__).parent.parent


def get_imports_from_file(file_path: Path) -> set[str]:
    """Extract all import statements from a Python file."""
    imports = set()
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            tree = ast.parse(f.read(), filename=str(file_path))

        for node in ast.walk(tree):
            if isinstance(node, ast.Import):
                for alias in node.names:
                    imports.add(alias.name)
            elif isinstance(node, ast.ImportFrom):
                if node.module:
                    imports.add(node.module)
    except SyntaxError:
        # Skip files with syntax errors
        pass
    return imports


def get_all_python_files(directory: Path) -> list[Path]:
    """Get all Python files in a directory recursively."""
    return list(directory.rglob("*.py"))


class TestDomainLayerConstraints:
    """Tests for domain layer architecture constraints."""

    def test_domain_has_no_infrastructure_imports(self):
        """Domain code should not import repositories, services, infrastructure or sqlite3."""
        domain_dir = get_project_root() / "domain"

        for file_path in get_all_python_files(domain_dir):
            imports = get_imports_from_file(file_path)
            forbidden = [
                imp
                for imp in imports
                if imp.startswith(("repositories", "services", "infrastructure"))
                or imp in ("sqlite3", "config")
            ]
            assert not forbidden, (
                f"{file_path.name} imports {forbidden}. "
                "Domain code should not depend on infrastructure."
            )


class TestRepositoryLayerConstraints:
    """Tests for repository layer architecture constraints."""

    def test_repositories_extend_base_repository(self):
        """All concrete repositories should extend BaseRepository."""
        repos_dir = get_project_root() / "repositories"

        for file_path in get_all_python_files(repos_dir):
            if file_path.name in ("__init__.py", "base_repository.py", "interfaces.py"):
                continue

            content = file_path.read_text(encoding="utf-8")
            if "Repository" in content and "class " in content:
                assert "BaseRepository" in content, (
                    f"{file_path.name} defines a Repository class but doesn't "
                    "seem to extend BaseRepository."
                )

    def test_repositories_do_not_open_connections(self):
        """Repositories go through the store client, never sqlite3 directly."""
        repos_dir = get_project_root() / "repositories"

        for file_path in get_all_python_files(repos_dir):
            assert "sqlite3" not in get_imports_from_file(file_path), (
                f"{file_path.name} imports sqlite3. Use the injected store client instead."
            )

    def test_repositories_do_not_import_services(self):
        repos_dir = get_project_root() / "repositories"

        for file_path in get_all_python_files(repos_dir):
            service_imports = [
                imp for imp in get_imports_from_file(file_path) if imp.startswith("services")
            ]
            assert not service_imports, f"{file_path.name} imports services: {service_imports}"


class TestServiceLayerConstraints:
    """Tests for service layer architecture constraints."""

    def test_services_do_not_import_infrastructure(self):
        """Services receive repositories by injection."""
        services_dir = get_project_root() / "services"

        for file_path in get_all_python_files(services_dir):
            infra_imports = [
                imp
                for imp in get_imports_from_file(file_path)
                if imp.startswith("infrastructure") or imp == "sqlite3"
            ]
            assert not infra_imports, (
                f"{file_path.name} imports infrastructure: {infra_imports}. "
                "Services should depend on repository interfaces."
            )


class TestNoCircularImports:
    """Tests to verify there are no circular import issues."""

    def test_can_import_core_modules(self):
        from domain.models import Account, CoinType
        from infrastructure.service_container import ServiceContainer
        from repositories import AccountRepository
        from services import AccountService, Result

        assert Account is not None
        assert CoinType is not None
        assert ServiceContainer is not None
        assert AccountRepository is not None
        assert AccountService is not None
        assert Result is not None
