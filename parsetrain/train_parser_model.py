#!/usr/bin/env python
"""
Train a model for one stage of the shift-reduce parser.

This takes a ``.jsonlines`` file of training events created by
``extract_parser_events``, trains a logistic regression model with SKLL,
and saves the model in a user-specified location.
"""

import argparse
import json
import logging
import os
import shutil
from configparser import ConfigParser

from skll.experiments import run_configuration


def write_training_config(events_path,
                          model_path,
                          working_path,
                          experiment_name="parser_events"):
    """
    Prepare the SKLL working directory and configuration file.

    Parameters
    ----------
    events_path : str
        Path to the ``.jsonlines`` file with the training events.
    model_path : str
        Path to the directory where the model should be stored.
    working_path : str
        Path to the directory where intermediate files should be stored.
    experiment_name : str
        Name of the SKLL experiment and feature set.

    Returns
    -------
    cfg_path : str
        Path to the SKLL configuration file.
    """
    os.makedirs(working_path, exist_ok=True)
    os.makedirs(model_path, exist_ok=True)

    learner_name = "LogisticRegression"
    param_grid = {"C": [10.0 ** x for x in range(-2, 3)]}
    grid_objective = "f1_score_macro"
    fixed_parameters = [{"random_state": 123456789, "penalty": "l2"}]

    # SKLL looks for the feature file by name in the training directory
    train_dir = os.path.join(working_path, "train")
    os.makedirs(train_dir, exist_ok=True)
    shutil.copyfile(events_path,
                    os.path.join(train_dir, f"{experiment_name}.jsonlines"))

    cfg_dict = {"General": {"task": "train",
                            "experiment_name": experiment_name},
                "Input": {"train_directory": train_dir,
                          "ids_to_floats": "False",
                          "featuresets": json.dumps([[experiment_name]]),
                          "featureset_names": json.dumps([experiment_name]),
                          "suffix": ".jsonlines",
                          "fixed_parameters": json.dumps(fixed_parameters),
                          "learners": json.dumps([learner_name])},
                "Tuning": {"feature_scaling": "none",
                           "grid_search": "True",
                           "min_feature_count": "1",
                           "objectives": json.dumps([grid_objective]),
                           "param_grids": json.dumps([param_grid])},
                "Output": {"probability": "True",
                           "models": model_path,
                           "logs": working_path}}

    # write config file
    cfg_path = os.path.join(working_path, f"{experiment_name}.cfg")
    cfg = ConfigParser()
    for section_name, section_dict in cfg_dict.items():
        cfg.add_section(section_name)
        for key, val in section_dict.items():
            cfg.set(section_name, key, val)
    with open(cfg_path, 'w') as config_file:
        cfg.write(config_file)

    return cfg_path


def train_parser_model(events_path, model_path, working_path,
                       experiment_name="parser_events"):
    """Train and save a model on the events in ``events_path``."""
    cfg_path = write_training_config(events_path,
                                     model_path,
                                     working_path,
                                     experiment_name=experiment_name)
    logging.info(f"running SKLL with {cfg_path}")
    run_configuration(cfg_path)


def main():  # noqa: D103
    parser = argparse.ArgumentParser(formatter_class=argparse.ArgumentDefaultsHelpFormatter)
    parser.add_argument("events_path",
                        help="Path to the .jsonlines file with the training "
                             "events.")
    parser.add_argument("model_path",
                        help="Path to where the model should be stored")
    parser.add_argument("-w",
                        "--working_path",
                        help="Path to where intermediate files should be "
                             "stored",
                        default="working")
    parser.add_argument("-n",
                        "--experiment_name",
                        help="Name of the experiment, used for the model "
                             "file name (e.g., the parser stage).",
                        default="parser_events")
    parser.add_argument("-v",
                        "--verbose",
                        help="Print more status information. For every "
                             "additional time this flag is specified, "
                             "output gets more verbose.",
                        default=0,
                        action="count")
    args = parser.parse_args()

    # convert verbose flag to logging level
    log_levels = [logging.WARNING, logging.INFO, logging.DEBUG]
    log_level = log_levels[min(args.verbose, 2)]

    # format warnings more nicely
    logging.captureWarnings(True)
    logging.basicConfig(format=("%(asctime)s - %(name)s - %(levelname)s - "
                                "%(message)s"),
                        level=log_level)

    logging.info("Training model")
    train_parser_model(args.events_path,
                       args.model_path,
                       args.working_path,
                       experiment_name=args.experiment_name)


if __name__ == "__main__":
    main()
