"""
Main method for labelhook. Start the web server.
"""

import os
from logging.config import dictConfig

from cheroot.server import HTTPServer
from cheroot.ssl.builtin import BuiltinSSLAdapter
from cheroot.wsgi import Server

import labelhook.constants as const
from labelhook.config import Config
from labelhook.flask_application import create_app
from labelhook.logging import LabelhookLoggingWrapper

if __name__ == "__main__":
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    dictConfig(
        {
            "version": 1,
            "formatters": {
                "json": {"class": "labelhook.logging.JsonLogFormatter"},
            },
            "handlers": {
                "wsgi": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stdout",
                    "formatter": "json",
                },
            },
            "root": {"level": LOG_LEVEL, "handlers": ["wsgi"]},
        }
    )

    HTTPServer.ssl_adapter = BuiltinSSLAdapter(
        certificate=os.environ.get("TLS_CERT_PATH", const.DEFAULT_TLS_CERT_PATH),
        private_key=os.environ.get("TLS_KEY_PATH", const.DEFAULT_TLS_KEY_PATH),
    )

    # configuration is read once and handed to the application
    app = LabelhookLoggingWrapper(create_app(Config.load()), LOG_LEVEL)

    port = int(os.environ.get("PORT", const.DEFAULT_PORT))
    # the host needs to be set to `0.0.0.0` so it can be reachable from outside the container
    server = Server(("0.0.0.0", port), app)  # nosec
    server.start()
