"""Root conftest - loads the login fixtures plugin."""

pytest_plugins = ["saas_e2e.fixtures"]
