import uvicorn

from app.config import load_config
from app.main import create_app


def main() -> None:
    cfg = load_config()
    app = create_app(cfg)
    uvicorn.run(app, host=cfg.host, port=cfg.port, log_level=cfg.log_level.lower(), log_config=None)


if __name__ == "__main__":
    main()
