import logging
import os
from logging.handlers import RotatingFileHandler

from app import create_app


# Setup logging
def setup_logging(app):
    """Configure logging system"""
    log_dir = app.config['LOG_DIR']
    if not os.path.exists(log_dir):
        os.makedirs(log_dir)

    log_file = os.path.join(log_dir, 'weather_service.log')

    handler = RotatingFileHandler(
        log_file, maxBytes=1000000, backupCount=5
    )
    handler.setFormatter(logging.Formatter(
        '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
    ))

    app.logger.addHandler(handler)
    app.logger.setLevel(logging.INFO)

    # Data source loggers go to the same file
    services_logger = logging.getLogger('app.services')
    services_logger.addHandler(handler)
    services_logger.setLevel(logging.INFO)


app = create_app()

# Initialize application
if __name__ == '__main__':
    setup_logging(app)
    app.logger.info(f"Server started at http://{app.config['HOST']}:{app.config['PORT']}")

    app.run(host=app.config['HOST'], port=app.config['PORT'], debug=False)
