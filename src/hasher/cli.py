import click
import uvicorn

from hasher.config import settings


@click.command()
@click.option("--host", default=settings.host, help="Interface to bind")
@click.option("--port", default=settings.port, help="Port to listen on")
@click.option("--log-level", default=settings.log_level.lower(), help="Uvicorn log level")
def main(host: str, port: int, log_level: str) -> None:
    """Run the password hash service.

    SIGINT/SIGTERM stop accepting connections, wait for in-flight requests,
    then exit. Unfinished hash jobs are dropped.
    """
    uvicorn.run("hasher.main:app", host=host, port=port, log_level=log_level)


if __name__ == "__main__":
    main()
