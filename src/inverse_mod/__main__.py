"""Run the inverse-mod CLI with `python -m inverse_mod`."""
from inverse_mod.cli import cli


def main():
    """Console-script target for `inverse-mod`."""
    cli()


if __name__ == "__main__":
    main()
