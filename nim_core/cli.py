from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional

from .ai import ai_pick_move, choose_first_player
from .evaluator import Evaluator, TieBreak
from .moves import apply_move, legal_moves
from .play import game_winner, simulate_game
from .rules import parse_move_set
from .state import GameState, Player, initial_state


def _env_flag(name: str) -> bool:
    return os.getenv(name, '0').lower() in ('1', 'true', 'yes', 'on')


def _parse_script(text: str) -> List[int]:
    sep = ',' if ',' in text else None
    return [int(t) for t in text.split(sep) if t.strip() != '']


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Subtraction-game solver and console opponent')
    parser.add_argument('--pile', type=int, default=int(os.getenv('NIM_DEFAULT_PILE', '20')),
                        help='Starting pile size')
    parser.add_argument('--moves', default=os.getenv('NIM_MOVES', '1,3,4'),
                        help='Legal move sizes, e.g. 1,3,4')
    parser.add_argument('--first', choices=['human', 'computer', 'auto'], default='human',
                        help='Who moves first; auto lets the computer take the winning side')
    parser.add_argument('--tie-break', choices=['smallest', 'largest'], default='smallest',
                        help='Which of several equally good moves the computer takes')
    parser.add_argument('--limit', type=int, default=20,
                        help='Largest pile listed in the winning-start table')
    parser.add_argument('--play', action='store_true', help='Play against the computer')
    parser.add_argument('--script', default=None,
                        help='Replay scripted human moves instead of prompting, e.g. 1,3,1')
    parser.add_argument('--debug', action='store_true', help='Verbose logging')
    return parser


def prompt_human_move(state: GameState, evaluator: Evaluator) -> int:
    moves = legal_moves(state, evaluator.move_set)
    print('Your legal moves:', list(moves))
    while True:
        text = input(f'{state.remaining} left. How many will you take? ').strip()
        try:
            move = int(text)
        except ValueError:
            print('Could not parse. Try again.')
            continue
        if move in moves:
            return move
        print('Illegal move. Try again.')


def play_interactive(state: GameState, evaluator: Evaluator) -> Player:
    while True:
        winner = game_winner(state, evaluator.move_set)
        if winner is not None:
            return winner
        if state.to_move is Player.COMPUTER:
            move = ai_pick_move(state, evaluator)
            print(f'Computer takes {move}.')
        else:
            move = prompt_human_move(state, evaluator)
        state = apply_move(state, move, evaluator.move_set)


def _winner_line(winner: Player) -> str:
    return 'You won!' if winner is Player.HUMAN else 'Computer won!'


def run(args: argparse.Namespace) -> int:
    evaluator = Evaluator(parse_move_set(args.moves), TieBreak(args.tie_break))
    if args.first == 'auto':
        first = choose_first_player(args.pile, evaluator)
    else:
        first = Player.parse(args.first)
    state = initial_state(args.pile, first)

    if args.script is not None:
        record = simulate_game(args.pile, _parse_script(args.script), evaluator, first=first)
        for ply in record.plies:
            who = 'Computer' if ply.player is Player.COMPUTER else 'You'
            print(f'{who} took {ply.move}, {ply.remaining} left')
        print(_winner_line(record.winner))
        return 0

    if args.play:
        print(f'Game started with {state.remaining} objects, moves {evaluator.move_set}.')
        print(f'{first.value.capitalize()} moves first.')
        print(_winner_line(play_interactive(state, evaluator)))
        return 0

    res = evaluator.solve(state)
    print(f'Pile {state.remaining}, {state.to_move.value} to move, moves {evaluator.move_set}')
    print(f'{res.winner.value.capitalize()} wins with optimal play.')
    if res.best_move is not None:
        print('Suggested move:', res.best_move)
    starts = evaluator.winning_starts(args.limit, first=first)
    print(f'Piles 1..{args.limit} won by the side moving first ({first.value}):', starts)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    debug = args.debug or _env_flag('NIM_DEBUG')
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)-8s - %(message)s',
    )
    try:
        return run(args)
    except ValueError as e:
        # NimError and bad configuration both land here
        print(f'error: {e}', file=sys.stderr)
        return 2
    except (EOFError, KeyboardInterrupt):
        print('\nGame abandoned.')
        return 130


if __name__ == '__main__':
    sys.exit(main())
