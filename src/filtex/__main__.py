"""Module entrypoint for python -m filtex."""

from filtex import cli


if __name__ == "__main__":
    cli.main()
