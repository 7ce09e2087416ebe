from dataclasses import dataclass
from pathlib import Path


@dataclass
class Settings:
    output_dir: Path = Path("output")
    output_name: str = "ebook.pdf"
    region_prefix: str = "mainPageContainer"
    image_marker: str = "img.mainViewerImg"
    visibility_threshold: float = 0.5
    image_format: str = "JPEG"
    jpeg_quality: int = 92
    points_per_pixel: float = 0.75  # 96 px/in onto 72 pt/in
    settle_timeout: float = 5.0

    @property
    def output_path(self) -> Path:
        return Path(self.output_dir) / self.output_name
