import sys

from camera_viewer.container import ApplicationContainer
from camera_viewer.frameworks.exceptions import CameraViewerError
from camera_viewer.frameworks.logging_config import get_logger

logger = get_logger(__name__)


def main():
    container = ApplicationContainer()

    try:
        pipeline = container.frame_pipeline()
    except CameraViewerError as e:
        logger.error(f"Critical error during startup: {e}")
        sys.exit(1)

    pipeline.run()


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        logger.info("Viewer terminated by user")
    except Exception as e:
        logger.error(f"Viewer failed: {e}")
        sys.exit(1)
