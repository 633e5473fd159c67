"""
Tilt Maze
=========

A tilt-controlled maze: steer a ball around fixed walls into a goal using
gyroscope angular-rate samples.

The simulation core lives in tilt_maze.maze_core. Tunable parameters are in
maze_config.yaml.
"""
