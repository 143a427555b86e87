"""Common converter command arguments."""

INPUT_FLAG: tuple[str, ...] = ("-i",)  #: Introduce an input file path.
OVERWRITE_OUTPUT: tuple[str, ...] = ("-y",)  #: Overwrite existing files.
KEEP_OUTPUT: tuple[str, ...] = ("-n",)  #: Never overwrite existing files.
TIME_LIMIT: tuple[str, ...] = ("-timelimit",)  #: Stop the converter after N seconds of CPU time.
AUDIO_CHANNELS: tuple[str, ...] = ("-ac",)  #: Number of audio channels.
AUDIO_RATE: tuple[str, ...] = ("-ar:a",)  #: Audio sample rate in Hz.
VIDEO_FILTER: tuple[str, ...] = ("-vf",)  #: Video filter graph.
VIDEO_FRAMES: tuple[str, ...] = ("-frames:v",)  #: Maximum number of video frames to write.
VARIABLE_FRAME_RATE: tuple[str, ...] = ("-vsync", "vfr")  #: Drop or duplicate frames to keep timestamps.
