"""FFmpeg transcoding.

Re-encodes uploaded video into a single web-friendly profile: 720p wide,
H.264 baseline, AAC audio, MP4 with the moov atom up front so playback can
start before the download finishes.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import List

from mediadrop.core.errors import ProcessingFailedError

logger = logging.getLogger(__name__)

OUTPUT_CONTENT_TYPE = "video/mp4"
OUTPUT_EXTENSION = ".mp4"

# Fixed encoding profile; not configurable per request.
WEB_PROFILE_ARGS = [
    "-vf", "scale=720:-2",
    "-c:v", "libx264",
    "-profile:v", "baseline",
    "-level", "3.1",
    "-preset", "slow",
    "-crf", "30",
    "-c:a", "aac",
    "-b:a", "128k",
    "-movflags", "+faststart",
    "-f", "mp4",
]


class Transcoder(ABC):
    """Abstract transcoder interface"""

    output_content_type: str = OUTPUT_CONTENT_TYPE
    output_extension: str = OUTPUT_EXTENSION

    @abstractmethod
    async def transcode(self, input_path: str, output_path: str) -> None:
        """Write the transcoded file to output_path or raise ProcessingFailedError"""


class FFmpegTranscoder(Transcoder):
    """FFmpeg-based video transcoder run as a subprocess."""

    def __init__(self, ffmpeg_path: str = "ffmpeg"):
        """Initialize transcoder.

        Args:
            ffmpeg_path: Path to ffmpeg binary
        """
        self.ffmpeg_path = ffmpeg_path

    def build_command(self, input_path: str, output_path: str) -> List[str]:
        """Build the ffmpeg argument list.

        Args:
            input_path: Path to the uploaded video
            output_path: Where ffmpeg writes the MP4

        Returns:
            FFmpeg command as list of arguments
        """
        return [
            self.ffmpeg_path,
            "-y",  # Overwrite output
            "-hide_banner",
            "-loglevel", "error",
            "-i", input_path,
            *WEB_PROFILE_ARGS,
            output_path,
        ]

    async def transcode(self, input_path: str, output_path: str) -> None:
        cmd = self.build_command(input_path, output_path)

        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            logger.error("Could not start %s: %s", self.ffmpeg_path, e)
            raise ProcessingFailedError(f"could not start {self.ffmpeg_path}") from e

        _, stderr = await process.communicate()

        if process.returncode != 0:
            tail = stderr.decode("utf-8", "ignore").strip()[-2000:]
            logger.error("ffmpeg exited with %s: %s", process.returncode, tail)
            raise ProcessingFailedError(f"ffmpeg exited with {process.returncode}")

        logger.info("Transcoded %s -> %s", input_path, output_path)
