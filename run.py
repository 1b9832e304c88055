#!/usr/bin/env python3
"""
Development server for the inventory catalog
"""
import logging
import os

from catalog import create_app

app = create_app()

if __name__ == '__main__':
    if app.config.get('ENV') == 'production':
        logging.getLogger(__name__).error(
            "The development server is disabled when FLASK_ENV=production; serve wsgi:app instead."
        )
        raise SystemExit(2)

    debug = bool(app.config.get('DEBUG'))
    app.run(
        host=os.environ.get('HOST', '127.0.0.1'),
        port=int(os.environ.get('PORT', 5000)),
        debug=debug,
        use_reloader=debug,
    )
