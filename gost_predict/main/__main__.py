"""Run the prediction server with ``python -m gost_predict.main``."""

from .server import main

if __name__ == "__main__":
    main()
