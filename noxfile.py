# noxfile.py
from nox_poetry import Session, session

PY_VERSIONS = ["3.11", "3.12"]
SOURCES = ("src", "tests", "noxfile.py")


@session(python=PY_VERSIONS)
def format(session: Session) -> None:
    """Sort imports and reformat in place."""
    session.install("black", "isort")
    session.run("isort", *SOURCES)
    session.run("black", *SOURCES)


@session(python=PY_VERSIONS)
def typecheck_mypy(session: Session) -> None:
    session.install("mypy", "pandas-stubs~=2.2")
    session.install(".")
    session.run("mypy", "--config-file", "pyproject.toml")


@session(python=PY_VERSIONS)
def lint(session: Session) -> None:
    session.install("ruff", "black", "isort")
    session.run("ruff", "check", *SOURCES)
    session.run("isort", "--check-only", *SOURCES)
    session.run("black", "--check", *SOURCES)


@session(python=PY_VERSIONS)
def tests(session: Session) -> None:
    """Unit tests against the installed package."""
    session.install(".[test]")
    session.run("pytest", "-q", *session.posargs)


@session(python=PY_VERSIONS[0])
def evaluate_example(session: Session) -> None:
    """Evaluate the bundled JSON roster end to end, without plots."""
    session.install(".")
    session.run(
        "staffing-coverage",
        "--input",
        "src/example_input.json",
        "--no-plots",
        "--export-dir",
        "outputs/example",
    )
