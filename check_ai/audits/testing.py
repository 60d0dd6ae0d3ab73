"""Testing - test suites and tooling agents can run to verify their changes."""

from ..core.checks import CheckDefinition, CheckType

SECTION = "Testing"

CHECKS = [
    CheckDefinition(
        id="test-dir",
        label="Test directory",
        section=SECTION,
        weight=5,
        type=CheckType.DIR,
        paths=("tests", "test", "__tests__", "spec", "t"),
        description="Dedicated test suite agents can run to check their work",
        hint="mkdir tests",
    ),
    CheckDefinition(
        id="test-config",
        label="Test runner config",
        section=SECTION,
        weight=3,
        type=CheckType.FILE,
        paths=(
            "pytest.ini",
            "tox.ini",
            "conftest.py",
            "jest.config.js",
            "jest.config.ts",
            "jest.config.mjs",
            "vitest.config.js",
            "vitest.config.ts",
            "vitest.config.mjs",
            "karma.conf.js",
            "phpunit.xml",
            ".rspec",
            "playwright.config.ts",
            "cypress.config.js",
            "cypress.config.ts",
        ),
        description="Explicit test runner configuration gives agents one obvious test command",
    ),
    CheckDefinition(
        id="coverage-config",
        label="Coverage config",
        section=SECTION,
        weight=2,
        type=CheckType.FILE,
        paths=(".coveragerc", "codecov.yml", ".codecov.yml", ".nycrc", ".nycrc.json", ".c8rc.json"),
        description="Coverage tracking shows agents which code lacks tests",
    ),
]
