import argparse
import logging
import sys

import numpy as np
import pygame

import graph_utils
from board import Board, InvalidConfiguration
from constants import DEFAULT_HEIGHT, DEFAULT_WIDTH, Direction
from logger import setup_logging

# --- Settings ---
# Layout
TILE_SIZE = 50
STATUS_BAR_HEIGHT = 36
WIRE_THICKNESS = TILE_SIZE // 10

# Colors
COLOR_BACKGROUND = (40, 40, 40)
COLOR_TILE = (64, 64, 64)
COLOR_TILE_BORDER = (30, 30, 30)
COLOR_WIRE_OFF = (128, 128, 128)
COLOR_WIRE_LIT = (255, 220, 0)
COLOR_SOURCE = (40, 200, 60)
COLOR_SOURCE_BORDER = (220, 30, 30)
COLOR_TEXT = (220, 220, 220)
COLOR_SOLVED = (120, 230, 120)

KEY_BINDINGS = {
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_UP: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
}

logger = logging.getLogger(__name__)

# =============================================================================
# GAME RULES ON TOP OF THE ENGINE
# =============================================================================

def scramble(board, seed=None):
    """Rotates every tile a random number of quarter turns."""
    rng = np.random.default_rng(seed)
    turns = rng.integers(0, 4, size=(board.width, board.height))
    for node in board.nodes:
        for _ in range(turns[node.row, node.col]):
            node.rotate()
    return turns


def make_board(width, height, seed=None, shuffle=True):
    """A new board, scrambled unless `shuffle` is off."""
    board = Board(width, height)
    if shuffle:
        scramble(board, seed)
    return board


def is_solved(board):
    """The puzzle is solved once every tile is connected to the source."""
    return len(graph_utils.reachable_set(board.source)) == len(board.nodes)


def wire_color(distance, radius):
    if 0 <= distance <= radius:
        return COLOR_WIRE_LIT
    return COLOR_WIRE_OFF


# =============================================================================
# PYGAME FRONT END
# =============================================================================

class LightEmAllGame:
    def __init__(self, board, tile_size=TILE_SIZE, seed=None, shuffle=True):
        pygame.init()
        self.board = board
        self.tile_size = tile_size
        self.seed = seed
        self.shuffle = shuffle
        self.grid_size = (board.width * tile_size, board.height * tile_size)
        self.screen = pygame.display.set_mode((self.grid_size[0], self.grid_size[1] + STATUS_BAR_HEIGHT))
        pygame.display.set_caption("Light 'Em All")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.Font(None, 24)
        self.moves = 0
        self.solved = is_solved(board)

    def get_grid_cell_from_mouse(self, mouse_pos):
        x, y = mouse_pos
        if 0 <= x < self.grid_size[0] and 0 <= y < self.grid_size[1]:
            return int(x // self.tile_size), int(y // self.tile_size)
        return None

    def handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT or (event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE):
                return False

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                cell = self.get_grid_cell_from_mouse(event.pos)
                if cell:
                    self.board.rotate(*cell)
                    self.moves += 1

            elif event.type == pygame.KEYDOWN:
                if event.key in KEY_BINDINGS:
                    self.board.move_source(KEY_BINDINGS[event.key])
                elif event.key == pygame.K_n:
                    # Fresh puzzle of the same size
                    self.seed = None if self.seed is None else self.seed + 1
                    self.board = make_board(self.board.width, self.board.height, self.seed, self.shuffle)
                    self.moves = 0
        return True

    def update(self):
        solved = is_solved(self.board)
        if solved and not self.solved:
            logger.info("Board solved after %d rotations", self.moves)
        self.solved = solved

    def draw(self):
        self.screen.fill(COLOR_BACKGROUND)
        distances = graph_utils.distance_map(self.board.source)
        for node in self.board.nodes:
            self.draw_tile(node, distances.get(node, -1))
        self.draw_status()
        pygame.display.flip()

    def draw_tile(self, node, distance):
        size = self.tile_size
        rect = pygame.Rect(node.row * size, node.col * size, size, size)
        pygame.draw.rect(self.screen, COLOR_TILE, rect)
        pygame.draw.rect(self.screen, COLOR_TILE_BORDER, rect, 1)

        color = wire_color(distance, self.board.radius)
        half = size // 2
        arm = half + 1
        wires = {
            Direction.LEFT: pygame.Rect(rect.left, rect.centery - WIRE_THICKNESS // 2, arm, WIRE_THICKNESS),
            Direction.RIGHT: pygame.Rect(rect.centerx, rect.centery - WIRE_THICKNESS // 2, arm, WIRE_THICKNESS),
            Direction.UP: pygame.Rect(rect.centerx - WIRE_THICKNESS // 2, rect.top, WIRE_THICKNESS, arm),
            Direction.DOWN: pygame.Rect(rect.centerx - WIRE_THICKNESS // 2, rect.centery, WIRE_THICKNESS, arm),
        }
        for direction, wire_rect in wires.items():
            if node.stubs[direction]:
                pygame.draw.rect(self.screen, color, wire_rect)

        if node.is_source:
            pygame.draw.circle(self.screen, COLOR_SOURCE, rect.center, size // 3)
            pygame.draw.circle(self.screen, COLOR_SOURCE_BORDER, rect.center, size // 3, 2)

    def draw_status(self):
        if self.solved:
            text, color = f"Solved in {self.moves} rotations! Press N for a new board.", COLOR_SOLVED
        else:
            text, color = f"Rotations: {self.moves}   Radius: {self.board.radius}", COLOR_TEXT
        surface = self.font.render(text, True, color)
        self.screen.blit(surface, (10, self.grid_size[1] + (STATUS_BAR_HEIGHT - surface.get_height()) // 2))

    def run(self):
        running = True
        while running:
            running = self.handle_events()
            self.update()
            self.draw()
            self.clock.tick(60)
        pygame.quit()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Rotate the tiles until every wire carries power.")
    parser.add_argument("--width", type=int, default=DEFAULT_WIDTH)
    parser.add_argument("--height", type=int, default=DEFAULT_HEIGHT)
    parser.add_argument("--tile-size", type=int, default=TILE_SIZE)
    parser.add_argument("--scramble", type=int, default=None, metavar="SEED",
                        help="Seed for the initial scramble. Random when omitted.")
    parser.add_argument("--no-scramble", action="store_true", help="Start from the solved maze.")
    parser.add_argument("--log-file", default="debug.log")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.log_file)

    shuffle = not args.no_scramble
    try:
        board = make_board(args.width, args.height, args.scramble, shuffle)
    except InvalidConfiguration as e:
        print(f"❌ {e}")
        return 1

    game = LightEmAllGame(board, args.tile_size, seed=args.scramble, shuffle=shuffle)
    game.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
