"""Run the loan engine API: python -m loan_engine"""

import uvicorn
from loan_engine.config import settings


def main() -> None:
    uvicorn.run(
        "loan_engine.api.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,  # keep the JSON logging set up by the app
    )


if __name__ == "__main__":
    main()
