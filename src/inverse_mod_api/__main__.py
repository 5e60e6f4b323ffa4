"""Entry point for the API server."""

import uvicorn

from inverse_mod.log_config import configure_logging


def main():
    """Start the API server."""
    configure_logging()
    uvicorn.run("inverse_mod_api.api:app", host="127.0.0.1", port=8000, reload=True)


if __name__ == "__main__":
    main()
