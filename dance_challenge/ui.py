"""UI layer: live/target body drawing, status banner, countdown and score."""

import math

import pygame

from .config import (
    COLOR_AVERAGE,
    COLOR_BLACK,
    COLOR_BONE,
    COLOR_JOINT,
    COLOR_LIVE,
    COLOR_NEGATIVE,
    COLOR_NEUTRAL_STATUS,
    COLOR_POSITIVE,
    COLOR_RECORDING,
    COLOR_SKIN,
    COLOR_WHITE,
    CORE_PARTS,
    FONT_PATH,
    HEIGHT,
    JOINT_RADIUS,
    LIMB_MINOR_RADIUS,
    MIN_PART_CONFIDENCE,
    PART_NAMES,
    WIDTH,
)
from .events import CalibrationStatus, CountdownTick, ScoreFeedback, SessionComplete
from .ledger import RoundOutcome
from .pose import Pose

pygame.font.init()
if FONT_PATH.exists():
    FONT_LARGE = pygame.font.Font(str(FONT_PATH), 24)
    FONT_MEDIUM = pygame.font.Font(str(FONT_PATH), 14)
    FONT_SMALL = pygame.font.Font(str(FONT_PATH), 10)
else:
    try:
        FONT_LARGE = pygame.font.SysFont("courier", 36, bold=True)
        FONT_MEDIUM = pygame.font.SysFont("courier", 22, bold=True)
        FONT_SMALL = pygame.font.SysFont("courier", 16)
    except (pygame.error, OSError):
        FONT_LARGE = pygame.font.Font(None, 40)
        FONT_MEDIUM = pygame.font.Font(None, 26)
        FONT_SMALL = pygame.font.Font(None, 18)

OUTCOME_COLORS = {
    RoundOutcome.POSITIVE: COLOR_POSITIVE,
    RoundOutcome.BONUS: COLOR_POSITIVE,
    RoundOutcome.NEUTRAL: COLOR_AVERAGE,
    RoundOutcome.NEGATIVE: COLOR_NEGATIVE,
}


class HudRenderer:
    """Draws the bodies and the HUD; learns what to show from engine events."""

    def __init__(self):
        self.reset()

    def reset(self, status: str = "Press 1 to dance, R to record"):
        self.status_text: str = status
        self.status_color: tuple = COLOR_NEUTRAL_STATUS
        self.countdown_text: str = ""
        self.score: int = 0
        self.final: SessionComplete | None = None

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------
    def handle_event(self, event):
        if isinstance(event, ScoreFeedback):
            self.status_text = event.message
            self.status_color = OUTCOME_COLORS[event.outcome]
            self.score = event.total
        elif isinstance(event, CountdownTick):
            self.countdown_text = f"Seconds until next pose: {event.text}"
        elif isinstance(event, CalibrationStatus):
            self.status_text = event.message
            self.status_color = COLOR_NEUTRAL_STATUS
        elif isinstance(event, SessionComplete):
            self.final = event
            self.status_text = ""
            self.status_color = COLOR_NEUTRAL_STATUS
            self.countdown_text = ""

    # ------------------------------------------------------------------
    # Bodies
    # ------------------------------------------------------------------
    def draw_poses(self, surface: pygame.Surface, live: list[Pose], target: Pose | None):
        overlay = pygame.Surface((WIDTH, HEIGHT), pygame.SRCALPHA)
        for pose in live:
            for part_a, part_b in pose.skeleton:
                pygame.draw.line(overlay, COLOR_LIVE, (part_a.x, part_a.y), (part_b.x, part_b.y), 2)
            for kp in self._core_keypoints(pose):
                pygame.draw.circle(overlay, COLOR_LIVE, (kp.x, kp.y), JOINT_RADIUS)

        if target is not None:
            for part_a, part_b in target.skeleton:
                self._draw_limb(overlay, part_a.x, part_a.y, part_b.x, part_b.y)
                pygame.draw.line(overlay, COLOR_BONE, (part_a.x, part_a.y), (part_b.x, part_b.y), 1)
            for kp in self._core_keypoints(target):
                pygame.draw.circle(overlay, COLOR_JOINT, (kp.x, kp.y), JOINT_RADIUS)

        surface.blit(overlay, (0, 0))

    @staticmethod
    def _core_keypoints(pose: Pose):
        for idx in CORE_PARTS:
            kp = pose.keypoint(PART_NAMES[idx])
            if kp is not None and kp.score > MIN_PART_CONFIDENCE:
                yield kp

    @staticmethod
    def _draw_limb(surface: pygame.Surface, x1, y1, x2, y2,
                   minor_r: float = LIMB_MINOR_RADIUS):
        """Rotated ellipse spanning the bone, like a body part."""
        dx, dy = x2 - x1, y2 - y1
        major_r = math.hypot(dx, dy) / 2.0
        if major_r < 1:
            return
        limb = pygame.Surface((int(major_r * 2), int(minor_r * 2)), pygame.SRCALPHA)
        pygame.draw.ellipse(limb, COLOR_SKIN, limb.get_rect())
        limb = pygame.transform.rotate(limb, -math.degrees(math.atan2(dy, dx)))
        rect = limb.get_rect(center=((x1 + x2) / 2.0, (y1 + y2) / 2.0))
        surface.blit(limb, rect)

    # ------------------------------------------------------------------
    # HUD
    # ------------------------------------------------------------------
    @staticmethod
    def _outlined_text(surface: pygame.Surface, text: str, pos: tuple, font: pygame.font.Font,
                       color: tuple, outline_color=COLOR_BLACK, outline_thickness: int = 2):
        text_surf = font.render(text, True, color[:3])
        out_surf = font.render(text, True, outline_color[:3])
        for dx, dy in [(-1, -1), (-1, 1), (1, -1), (1, 1), (0, -1), (0, 1), (-1, 0), (1, 0)]:
            surface.blit(out_surf, (pos[0] + dx * outline_thickness, pos[1] + dy * outline_thickness))
        surface.blit(text_surf, pos)

    @staticmethod
    def _draw_centered_text(surface: pygame.Surface, text: str, y: int,
                            font: pygame.font.Font, color: tuple):
        x = (WIDTH - font.size(text)[0]) // 2
        HudRenderer._outlined_text(surface, text, (x, y), font, color)

    def draw_hud(self, surface: pygame.Surface, recording: bool = False):
        # Status banner
        if self.status_text:
            lines = self.status_text.split("\n")
            banner_h = 12 + 26 * len(lines)
            banner = pygame.Surface((WIDTH, banner_h), pygame.SRCALPHA)
            banner.fill((*self.status_color, 200))
            surface.blit(banner, (0, HEIGHT - banner_h))
            for i, line in enumerate(lines):
                self._draw_centered_text(surface, line, HEIGHT - banner_h + 6 + 26 * i,
                                         FONT_MEDIUM, COLOR_WHITE)

        self._outlined_text(surface, f"Score: {self.score}", (12, 10), FONT_MEDIUM, COLOR_WHITE)
        if self.countdown_text:
            self._outlined_text(surface, self.countdown_text, (12, 40), FONT_SMALL, COLOR_WHITE)

        if recording:
            pygame.draw.circle(surface, COLOR_RECORDING, (WIDTH - 24, 24), 10)
            self._outlined_text(surface, "REC", (WIDTH - 80, 16), FONT_SMALL, COLOR_RECORDING)

        if self.final is not None:
            over = pygame.Surface((WIDTH, HEIGHT), pygame.SRCALPHA)
            over.fill((0, 0, 0, 160))
            surface.blit(over, (0, 0))
            self._draw_centered_text(surface, f"Final score: {self.final.final_score}",
                                     HEIGHT // 2 - 50, FONT_LARGE, COLOR_WHITE)
            self._draw_centered_text(surface, self.final.message, HEIGHT // 2,
                                     FONT_MEDIUM, COLOR_WHITE)
            self._draw_centered_text(surface, "Press 1 to play again", HEIGHT // 2 + 50,
                                     FONT_SMALL, COLOR_WHITE)
