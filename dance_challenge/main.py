"""Main application: camera loop, session wiring, music and keyboard."""

import argparse
import logging
import sys
import time

import cv2
import numpy as np
import pygame

from .config import CAMERA_INDEX, DISPLAY_FPS_CAP, HEIGHT, SONG_PATH, WIDTH, WINDOW_TITLE
from .engine import ChallengeEngine
from .events import SessionComplete
from .playlist import PlaylistError, load_catalog_dance, load_playlist
from .pose import DanceMove
from .recorder import DanceRecorder
from .scheduler import SessionScheduler, schedule_session
from .tracking import AcquisitionFailure, PoseTracker
from .ui import HudRenderer

logger = logging.getLogger(__name__)


class DanceChallengeApp:
    """Top-level controller that wires the camera, engine, scheduler and HUD."""

    def __init__(self, camera_index: int = CAMERA_INDEX, playlist_path: str | None = None,
                 song_path: str | None = None, record_to: str = "recorded_dance.json"):
        self.tracker = PoseTracker(camera_index)
        self.hud = HudRenderer()
        self.recorder = DanceRecorder()

        self.playlist_path = playlist_path
        self.song_path = song_path or str(SONG_PATH)
        self.record_to = record_to

        self.engine: ChallengeEngine | None = None
        self.scheduler: SessionScheduler | None = None
        self._poses: list = []

        self._sound_ready = False
        try:
            pygame.mixer.init()
            self._sound_ready = True
        except pygame.error as e:
            logger.warning("Audio disabled: %s", e)

    # ------------------------------------------------------------------
    # Music
    # ------------------------------------------------------------------
    def _restart_song(self):
        if not self._sound_ready:
            return
        try:
            pygame.mixer.music.load(self.song_path)
            pygame.mixer.music.play()
        except pygame.error as e:
            logger.warning("Cannot play %s: %s", self.song_path, e)

    def _stop_song(self):
        if self._sound_ready:
            pygame.mixer.music.stop()

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------
    def _stop_session(self):
        if self.scheduler is not None:
            self.scheduler.cancel()
        self.scheduler = None
        self.engine = None
        self._stop_song()

    def _start_session(self, moves: list[DanceMove]):
        # A fresh engine and scheduler every time; nothing carries over
        self._stop_session()
        self.hud.reset(status="")
        self.engine = ChallengeEngine(moves)
        self.engine.subscribe(self.hud.handle_event)
        self.engine.subscribe(self._on_engine_event)
        self.scheduler = SessionScheduler()
        schedule_session(self.scheduler, self.engine, lambda: self._poses,
                         on_playback=self._restart_song)

    def _on_engine_event(self, event):
        if isinstance(event, SessionComplete):
            self._stop_song()

    def _play_catalog(self):
        try:
            self._start_session(load_catalog_dance("dancing_queen"))
        except PlaylistError as e:
            logger.error("%s", e)
            self.hud.reset(status="Could not load the bundled dance")

    def _play_file(self):
        if not self.playlist_path:
            self.hud.reset(status="No playlist given (--playlist)")
            return
        try:
            self._start_session(load_playlist(self.playlist_path))
        except PlaylistError as e:
            logger.error("%s", e)
            self.hud.reset(status="Could not load the playlist file")

    # ------------------------------------------------------------------
    # Recording
    # ------------------------------------------------------------------
    def _toggle_recording(self):
        now = time.monotonic()
        if self.recorder.recording:
            self.recorder.stop()
            self._stop_song()
            self.recorder.save(self.record_to)
            self.hud.reset(status=f"Saved {len(self.recorder.moves)} moves")
        else:
            self._stop_session()
            self.recorder.start(now)
            self._restart_song()
            self.hud.reset(status="Recording... press R to stop")

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------
    def run(self):
        pygame.init()
        screen = pygame.display.set_mode((WIDTH, HEIGHT), pygame.SCALED)
        pygame.display.set_caption(WINDOW_TITLE)
        clock = pygame.time.Clock()
        running = True

        def _bgr_to_surface(bgr) -> pygame.Surface:
            rgb = cv2.cvtColor(bgr, cv2.COLOR_BGR2RGB)
            return pygame.surfarray.make_surface(np.transpose(rgb, (1, 0, 2)))

        try:
            while running:
                frame, self._poses = self.tracker.read()
                if frame is None:
                    logger.error("Camera stopped delivering frames")
                    break

                if self.scheduler is not None:
                    self.scheduler.pump()
                if self.recorder.recording:
                    self.recorder.sample(self._poses[0] if self._poses else None,
                                         time.monotonic())

                screen.blit(_bgr_to_surface(frame), (0, 0))
                target = self.engine.target if self.engine and not self.engine.finished else None
                self.hud.draw_poses(screen, self._poses, target)
                self.hud.draw_hud(screen, recording=self.recorder.recording)
                pygame.display.flip()

                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        running = False
                    elif event.type == pygame.KEYDOWN:
                        if event.key in (pygame.K_q, pygame.K_ESCAPE):
                            running = False
                        elif event.key == pygame.K_1 and not self.recorder.recording:
                            self._play_catalog()
                        elif event.key == pygame.K_2 and not self.recorder.recording:
                            self._play_file()
                        elif event.key == pygame.K_r:
                            self._toggle_recording()

                clock.tick(DISPLAY_FPS_CAP)
        finally:
            self._stop_session()
            self.tracker.close()
            pygame.quit()


# ---------------------------------------------------------------------------
# Module-level entry point
# ---------------------------------------------------------------------------
def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Match the dance moves on screen with your body.")
    parser.add_argument("--playlist", help="dance playlist JSON to play with key 2")
    parser.add_argument("--camera", type=int, default=CAMERA_INDEX, help="camera index")
    parser.add_argument("--song", help="music file played during a session")
    parser.add_argument("--record-to", default="recorded_dance.json",
                        help="where key R saves a recorded dance")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        app = DanceChallengeApp(args.camera, args.playlist, args.song, args.record_to)
    except AcquisitionFailure as e:
        logger.error("Cannot start: %s", e)
        sys.exit(1)
    app.run()


if __name__ == "__main__":
    main()
