from fastapi import FastAPI


def create_app() -> FastAPI:
    app = FastAPI(title="Ozark vs Valley auto-pairing")
    return app
