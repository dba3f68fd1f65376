"""
Pursuit Demo
============
Runs the headless pursuit world against a live-learning engine,
then saves accuracy/error curves and metrics
"""

import json
import os
import sys
from datetime import datetime

import matplotlib.pyplot as plt
import numpy as np
import yaml
from tqdm import tqdm

from adaptive_predictor.config import EngineConfig
from adaptive_predictor.engine import AdaptiveEngine
from adaptive_predictor.pursuit import PursuitWorld


class PursuitRunner:
    """Drives one engine through the pursuit world for a fixed number of ticks"""

    def __init__(self, config_path="config.yaml", log_root="logs"):
        with open(config_path, 'r') as f:
            self.config = yaml.safe_load(f)

        sim = self.config.get('simulation', {})
        self.ticks = sim.get('ticks', 5000)
        self.report_every = sim.get('report_every', 500)

        engine_config = EngineConfig.from_dict(self.config.get('engine', {}))
        self.engine = AdaptiveEngine(
            PursuitWorld.OBSERVATION_SIZE,
            sim.get('hidden_size', 12),
            PursuitWorld.TARGET_SIZE,
            engine_config,
        )
        self.world = PursuitWorld(
            width=sim.get('width', 800),
            height=sim.get('height', 600),
            chaser_speed=sim.get('chaser_speed', 3.0),
            easing=sim.get('easing', 0.1),
            lookahead=sim.get('lookahead', 10),
            waypoint_change_prob=sim.get('waypoint_change_prob', 0.02),
            rng=np.random.default_rng(engine_config.seed),
        )

        # Logging
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        self.log_dir = os.path.join(log_root, f"run_{timestamp}")
        os.makedirs(self.log_dir, exist_ok=True)

        # Metrics
        self.accuracy_per_tick = []
        self.fire_accuracy = []
        self.fire_errors = []
        self.episode_lengths = []

    def run(self):
        """Main loop"""
        print("\n" + "="*70)
        print("PURSUIT DEMO - ONLINE LEARNING")
        print("="*70)
        print(f"Ticks:            {self.ticks}")
        print(f"Network:          {self.engine.network}")
        print(f"Buffer capacity:  {self.engine.config.buffer_capacity}")
        print(f"Train prob/tick:  {self.engine.config.train_fire_probability}")
        print("="*70 + "\n")

        self.world.reset()
        episode_start = 0

        for tick in tqdm(range(1, self.ticks + 1), desc="Simulating"):
            events_before = self.engine.training_events
            accuracy, caught = self.world.step(self.engine)
            self.accuracy_per_tick.append(accuracy)

            if self.engine.training_events > events_before:
                self.fire_accuracy.append(accuracy)
                self.fire_errors.append(self.engine.error_history[-1])

            if caught:
                self.episode_lengths.append(tick - episode_start)
                episode_start = tick
                # New episode: training data is dropped, weights persist
                self.engine.reset()
                self.world.reset()

            if tick % self.report_every == 0:
                tqdm.write(f"Tick {tick:6d} | "
                           f"Accuracy: {accuracy:5.1f}% | "
                           f"Trains: {self.engine.training_events:4d} | "
                           f"Catches: {self.world.total_catches:3d}")

        self._print_summary()
        self._save_plots()
        self._save_metrics()

    def _print_summary(self):
        print(f"\n{'='*70}")
        print("Summary:")
        print(f"{'='*70}")
        print(f"  Catches:              {self.world.total_catches}")
        if self.episode_lengths:
            print(f"  Avg ticks per catch:  {np.mean(self.episode_lengths):8.1f}")
        print(f"  Final accuracy:       {self.engine.accuracy:8.1f}%")
        if self.fire_errors:
            print(f"  Recent batch error:   {np.mean(self.fire_errors[-20:]):8.4f}")
        print(f"{'='*70}\n")

    def _save_plots(self):
        """Save accuracy and batch error per training event"""
        fig, axes = plt.subplots(1, 2, figsize=(14, 5))

        axes[0].plot(self.fire_accuracy, alpha=0.8)
        axes[0].set_title('Accuracy per Training Event')
        axes[0].set_xlabel('Training event')
        axes[0].set_ylim(0, 100)
        axes[0].grid(True, alpha=0.3)

        errors = self.fire_errors
        axes[1].plot(errors, alpha=0.4)
        if len(errors) >= 50:
            ma = np.convolve(errors, np.ones(50)/50, mode='valid')
            axes[1].plot(range(49, len(errors)), ma, 'r-', linewidth=2)
        axes[1].set_title('Mean Batch Error')
        axes[1].set_xlabel('Training event')
        axes[1].grid(True, alpha=0.3)

        plt.tight_layout()
        plt.savefig(f"{self.log_dir}/training_curves.png", dpi=150)
        plt.close(fig)
        print(f"Plots saved to {self.log_dir}/training_curves.png")

    def _save_metrics(self):
        metrics = {
            'ticks': self.ticks,
            'catches': self.world.total_catches,
            'episode_lengths': self.episode_lengths,
            'final_accuracy': float(self.engine.accuracy),
            'training_updates': self.engine.trainer.training_step,
            'training_events': len(self.fire_errors),
            'batch_errors': [float(e) for e in self.fire_errors],
            'engine_config': self.engine.config.to_dict(),
        }

        with open(f"{self.log_dir}/metrics.json", 'w') as f:
            json.dump(metrics, f, indent=2)
        print(f"Metrics saved to {self.log_dir}/metrics.json")


def main():
    config_path = sys.argv[1] if len(sys.argv) > 1 else "config.yaml"
    try:
        runner = PursuitRunner(config_path=config_path)
        runner.run()
    except KeyboardInterrupt:
        print("\n\nDemo interrupted by user.")


if __name__ == "__main__":
    main()
