import logging

import uvicorn
from ration.api.api_run import app
from ration.utilities import config


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.DEBUG if config.DEBUG else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # Print a friendly message that points to the URL you can open in a browser
    print(f"Uvicorn running on http://localhost:{config.APP_PORT} (Press CTRL+C to quit)")
    uvicorn.run(app, host=config.APP_HOST, port=config.APP_PORT)
