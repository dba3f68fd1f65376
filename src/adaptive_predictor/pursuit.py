"""
Pursuit World
=============
Headless chase scenario used to drive the engine: a runner eases toward a
wandering waypoint while a chaser moves toward the position the engine
predicts the runner will reach.
"""

import math
from typing import List, Optional, Tuple

import numpy as np


class Body:
    def __init__(self, x: float, y: float, radius: float = 15.0):
        self.x = x
        self.y = y
        self.vx = 0.0
        self.vy = 0.0
        self.radius = radius

    def clamp(self, width: float, height: float):
        self.x = max(self.radius, min(width - self.radius, self.x))
        self.y = max(self.radius, min(height - self.radius, self.y))

    def distance_to(self, other: "Body") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)


class PursuitWorld:
    """
    Runner/chaser arena

    Observation (6 floats): runner x, y normalized by the arena, runner
    velocity / 10, chaser x, y normalized.
    Target (2 floats): runner position `lookahead` ticks ahead, normalized.
    """

    OBSERVATION_SIZE = 6
    TARGET_SIZE = 2

    def __init__(self, width: float = 800.0, height: float = 600.0,
                 chaser_speed: float = 3.0, easing: float = 0.1,
                 lookahead: int = 10, waypoint_change_prob: float = 0.02,
                 rng: Optional[np.random.Generator] = None):
        self.width = width
        self.height = height
        self.chaser_speed = chaser_speed
        self.easing = easing
        self.lookahead = lookahead
        self.waypoint_change_prob = waypoint_change_prob
        self.rng = rng if rng is not None else np.random.default_rng()

        self.runner = Body(width / 2, height / 2)
        self.chaser = Body(width / 4, height / 4)
        self.waypoint = (width / 2, height / 2)

        self.total_steps = 0
        self.total_catches = 0

    def reset(self) -> List[float]:
        """Put both bodies back at their start positions"""
        self.runner = Body(self.width / 2, self.height / 2)
        self.chaser = Body(self.width / 4, self.height / 4)
        self.waypoint = (self.width / 2, self.height / 2)
        return self.get_observation()

    def _random_waypoint(self) -> Tuple[float, float]:
        return (float(self.rng.uniform(0, self.width)),
                float(self.rng.uniform(0, self.height)))

    def move_runner(self):
        """Ease the runner toward its waypoint, picking a new one now and then"""
        if self.rng.random() < self.waypoint_change_prob:
            self.waypoint = self._random_waypoint()

        runner = self.runner
        runner.vx = (self.waypoint[0] - runner.x) * self.easing
        runner.vy = (self.waypoint[1] - runner.y) * self.easing
        runner.x += runner.vx
        runner.y += runner.vy
        runner.clamp(self.width, self.height)

    def move_chaser(self, prediction: List[float]):
        """Step the chaser at fixed speed toward the predicted position"""
        chaser = self.chaser
        dx = prediction[0] * self.width - chaser.x
        dy = prediction[1] * self.height - chaser.y
        dist = math.hypot(dx, dy)

        # Keep the previous heading when already on the target
        if dist > 0:
            chaser.vx = dx / dist * self.chaser_speed
            chaser.vy = dy / dist * self.chaser_speed

        chaser.x += chaser.vx
        chaser.y += chaser.vy
        chaser.clamp(self.width, self.height)

    def get_observation(self) -> List[float]:
        return [
            self.runner.x / self.width,
            self.runner.y / self.height,
            self.runner.vx / 10,
            self.runner.vy / 10,
            self.chaser.x / self.width,
            self.chaser.y / self.height,
        ]

    def get_target(self) -> List[float]:
        """Where the runner will be after `lookahead` ticks at its current velocity"""
        future_x = self.runner.x + self.runner.vx * self.lookahead
        future_y = self.runner.y + self.runner.vy * self.lookahead
        return [future_x / self.width, future_y / self.height]

    def caught(self) -> bool:
        return self.runner.distance_to(self.chaser) < self.runner.radius + self.chaser.radius

    def step(self, engine) -> Tuple[float, bool]:
        """
        Advance one tick with the given engine

        Args:
            engine: AdaptiveEngine with a 6 -> ? -> 2 shape

        Returns:
            (accuracy, caught)
        """
        self.move_runner()

        observation = self.get_observation()
        prediction = engine.predict(observation)
        self.move_chaser(prediction)

        accuracy = engine.observe(observation, self.get_target())
        self.total_steps += 1

        caught = self.caught()
        if caught:
            self.total_catches += 1
        return accuracy, caught
