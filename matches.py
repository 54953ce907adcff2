import csv
from typing import List

import numpy as np
import pandas as pd

RANDOM_CANDIDATES_FILENAME = "candidates.csv"


class Match:
    def __init__(self, id_, path, score):
        self.id = id_
        self.path = path
        self.score = score

    def __repr__(self):
        return f"Match(id={self.id}, path={self.path!r}, score={self.score})"


class CandidateParams:
    def __init__(self):
        self.n_candidates = 0
        self.average_score = 0.0
        self.candidates_from_file = 0
        self.candidates_filename = ""
        self.seed = None


# Generate Random Candidates
def generate_random_candidates(params: CandidateParams, random_generator: np.random.Generator) -> None:
    try:
        with open(RANDOM_CANDIDATES_FILENAME, "w", newline='') as candidates_file:
            writer = csv.writer(candidates_file)
            writer.writerow(["id", "path", "score"])

            for i in range(params.n_candidates):
                depth = random_generator.integers(1, 4)
                parts = [f"dir{random_generator.integers(0, 10)}" for _ in range(depth)]
                path = "/".join(parts + [f"file_{i}.txt"])
                score = round(abs(params.average_score + random_generator.normal(0, 1)), 6)
                writer.writerow([i, path, score])
    except OSError as e:
        raise RuntimeError(f"Error generating random candidates: {e}")


# Generate Candidates from File
def generate_candidates(params: CandidateParams) -> List[Match]:
    """Reads candidates from a CSV file and returns a list of Match objects."""
    candidates_filename = RANDOM_CANDIDATES_FILENAME if not params.candidates_from_file else params.candidates_filename

    try:
        candidates_df = pd.read_csv(candidates_filename)
        if candidates_df.isnull().values.any():
            missing_rows = candidates_df.index[candidates_df.isnull().any(axis=1)].tolist()
            raise ValueError(f"missing values in rows {missing_rows}")
        return [
            Match(id_=int(row.id), path=str(row.path), score=float(row.score))
            for row in candidates_df.itertuples(index=False)
        ]
    except FileNotFoundError:
        raise RuntimeError(f"File '{candidates_filename}' not found. Please ensure it exists or generate candidates first.")
    except (AttributeError, ValueError) as e:
        raise RuntimeError(f"Error parsing candidates file '{candidates_filename}': {e}")


# Initialize Candidates
def initialize_candidates(params: CandidateParams, random_generator: np.random.Generator) -> List[Match]:
    if not params.candidates_from_file:
        generate_random_candidates(params, random_generator)
    return generate_candidates(params)
