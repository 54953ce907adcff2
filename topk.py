import csv
import logging
import os
import sys
import time

import numpy as np

from logger import print_, setup_logging
from matches import CandidateParams, initialize_candidates
from selection import N_THREADS, SelectionParams, select_top_threads

INPUT_FILENAME = "topk_input.txt"


def write_output(results, output_dir_name):
    if not os.path.exists(output_dir_name):
        print_("topk.py: Cannot find the output directory. The output will be stored in the current directory.",
               level=logging.WARNING)
        output_dir_name = "./"

    with open(os.path.join(output_dir_name, "selection_output.csv"), "w", newline='') as csv_selection_output:
        writer = csv.writer(csv_selection_output)
        writer.writerow(["rank", "id", "path", "score"])
        for rank, match in enumerate(results, start=1):
            writer.writerow([rank, match.id, match.path, match.score])


def initialize_input_parameters(cand_params, sel_params):
    cand_params.n_candidates = 0
    cand_params.average_score = 0.0
    cand_params.candidates_from_file = 0
    cand_params.candidates_filename = ""
    cand_params.seed = None
    sel_params.limit = 0
    sel_params.n_threads = N_THREADS


def read_input(cand_params, sel_params, filename=INPUT_FILENAME):
    initialize_input_parameters(cand_params, sel_params)

    try:
        with open(filename, "r") as input_file:
            for line in input_file:
                if not line.strip():
                    continue
                parameter, value = line.strip().split("=")
                parameter = parameter.strip()
                value = value.strip()

                if parameter == "generate_candidates_from_file":
                    cand_params.candidates_from_file = 1 if value == "true" else 0
                elif parameter == "candidates_filename":
                    cand_params.candidates_filename = value
                elif parameter == "n_candidates":
                    cand_params.n_candidates = int(value)
                elif parameter == "average_score":
                    cand_params.average_score = float(value)
                elif parameter == "limit":
                    sel_params.limit = int(value)
                elif parameter == "n_threads":
                    sel_params.n_threads = int(value)
                elif parameter == "seed":
                    cand_params.seed = int(value)
                else:
                    raise ValueError(f"Unknown parameter {parameter}")
    except FileNotFoundError:
        print_(f"ERROR: cannot open file <{filename}> in current directory.", level=logging.ERROR)
        sys.exit(-1)


def initialize_random_generator(seed=None):
    return np.random.default_rng(seed)


def main(argv):
    setup_logging()
    if len(argv) != 2:
        print_("ERROR topk.py: please specify the output directory", level=logging.ERROR)
        return -1

    output_dir_name = argv[1]
    cand_params = CandidateParams()
    sel_params = SelectionParams()
    read_input(cand_params, sel_params)

    random_generator = initialize_random_generator(cand_params.seed)
    print_("CANDIDATES INITIALIZATION")
    candidates = initialize_candidates(cand_params, random_generator)

    print_("EXECUTION OF THE SELECTION")
    begin = time.time()
    results = select_top_threads(candidates, sel_params.limit, n_threads=sel_params.n_threads)
    time_spent = time.time() - begin
    print_(f"Selected {len(results)} of {len(candidates)} candidates in {time_spent:.2f} s")

    write_output(results, output_dir_name)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
