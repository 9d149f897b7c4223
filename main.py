import os

import uvicorn

from services.order_service.main import create_app

app = create_app()


def run():
    uvicorn.run(app, host=os.getenv("HOST", "0.0.0.0"), port=int(os.getenv("PORT", "8000")))


if __name__ == "__main__":
    run()
