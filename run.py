import logging

from kinetic.app import DemoApp
from kinetic.settings import load_settings

def main():
    cfg = load_settings()
    logging.basicConfig(level=cfg.log_level, format="%(asctime)s %(name)s %(levelname)s: %(message)s")
    app = DemoApp(cfg)
    app.run()

if __name__ == "__main__":
    main()
