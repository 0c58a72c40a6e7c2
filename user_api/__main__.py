# user_api/__main__.py
import uvicorn

from user_api.config import HOST, PORT
from user_api.logging_config import setup_logging


def main():
    setup_logging()
    print("=" * 50)
    print(f"Server is running on http://127.0.0.1:{PORT}")
    print(f"Health: http://127.0.0.1:{PORT}/api/health")
    print("=" * 50)
    uvicorn.run("user_api.main:app", host=HOST, port=PORT, log_config=None)


if __name__ == "__main__":
    main()
