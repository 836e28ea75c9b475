import nox

nox.needs_version = ">=2024.4.15"
nox.options.default_venv_backend = "uv|virtualenv"


@nox.session
@nox.parametrize("editable", [True, False])
def tests(session: nox.Session, editable: bool) -> None:
    session.install("-e.[test]" if editable else ".[test]")
    session.run("pytest", "--timeout=30", "tests", *session.posargs)


@nox.session
def imports(session: nox.Session) -> None:
    session.install(".")
    # The package must import without any test dependency installed.
    out = session.run("python", "-c", "import webform; print(webform.__version__)", silent=True)
    assert out.strip(), "webform did not report a version"
