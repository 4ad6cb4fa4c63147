"""Coverage Bounded Context.

Responsible for radio coverage of receivers by transmitters:
- Value Objects: Island, Transmitter, Receiver, ProblemInstance, Solution
- Services: build_distance_index, greedy_step, solve (transmitter power planning)
"""
