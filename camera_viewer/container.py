from dependency_injector import containers, providers

from .adaptors.camera.opencv_capture import OpenCVCaptureSource
from .entities.common import ControlId
from .entities.frame import CaptureFormat
from .frameworks.config import AppConfig
from .frameworks.logging_config import get_logger
from .frameworks.ui.viewer_window import QtViewerWindow
from .usecases.display_geometry import DisplayGeometryManager
from .usecases.exposure_control import ExposureFeedbackController
from .usecases.frame_pipeline import FramePipeline, open_first_camera
from .usecases.hardware_control import HardwareControl


def _create_window(camera, title: str, resizable: bool, always_on_top: bool):
    width, height = camera.resolution
    return QtViewerWindow(
        title=title,
        width=width,
        height=height,
        resizable=resizable,
        always_on_top=always_on_top,
    )


class ApplicationContainer(containers.DeclarativeContainer):
    config = providers.Singleton(AppConfig.from_yaml_or_default)

    logger = providers.Singleton(get_logger, name="camera_viewer")

    capture_source = providers.Singleton(
        OpenCVCaptureSource,
        max_devices=config.provided.camera.max_devices,
        backend=config.provided.camera.backend,
        control_tool=config.provided.camera.control_tool,
        device_path_template=config.provided.camera.device_path_template,
    )

    capture_format = providers.Factory(
        CaptureFormat,
        highest_resolution=config.provided.camera.highest_resolution,
        width=config.provided.camera.width,
        height=config.provided.camera.height,
    )

    camera = providers.Singleton(
        open_first_camera,
        source=capture_source,
        requested_format=capture_format,
        requested_fps=config.provided.camera.requested_fps,
    )

    gamma_control = providers.Singleton(
        HardwareControl.from_device, device=camera, control_id=ControlId.GAMMA
    )

    brightness_control = providers.Singleton(
        HardwareControl.from_device, device=camera, control_id=ControlId.BRIGHTNESS
    )

    window = providers.Singleton(
        _create_window,
        camera=camera,
        title=config.provided.window.title,
        resizable=config.provided.window.resizable,
        always_on_top=config.provided.window.always_on_top,
    )

    exposure_controller = providers.Factory(
        ExposureFeedbackController,
        device=camera,
        gamma=gamma_control,
        brightness=brightness_control,
        target_lightness=config.provided.exposure.target_lightness,
        lightness_range=config.provided.exposure.lightness_range,
    )

    geometry_manager = providers.Factory(
        DisplayGeometryManager,
        window=window,
        native_size=camera.provided.resolution,
    )

    frame_pipeline = providers.Factory(
        FramePipeline,
        device=camera,
        window=window,
        exposure=exposure_controller,
        geometry=geometry_manager,
        mirrored=config.provided.window.mirrored,
        title_refresh_frames=config.provided.window.title_refresh_frames,
        fps_average_window=config.provided.window.fps_average_window,
    )
