pytest_plugins = ["tested_di.infrastructure.testing.pytest_plugin"]
