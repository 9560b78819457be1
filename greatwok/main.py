import uvicorn

from greatwok.core import config
from greatwok.app import create_app

app = create_app()


def run():
    uvicorn.run(app, host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    run()
