"""Probe-fan obstacle avoidance and tank-style teleop for a differential-drive vehicle."""
