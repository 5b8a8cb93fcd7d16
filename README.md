# myopicbot

The pieces a chess bot needs to play on Lichess, apart from the engine
itself. Requires Python 3.10 or later; the only runtime dependency is
`httpx`.

## What is inside

- `myopicbot.timing`: `TimeAllocator.allocate(half_moves_played,
  remaining_time, increment)` returns a `timedelta` to spend thinking. With
  less than `increment_only_threshold` (5 s) on the clock and a positive
  increment it thinks for the increment minus `latency` (200 ms); otherwise
  it shares the remaining time over half of the expected remaining half moves
  and adds the increment. Never less than `min_compute_time` (200 ms).
  `expected_half_moves_remaining` is the default estimate of how long a game
  still has to run.
- `myopicbot.ratings`: `TimeLimitType` and `TimeLimits.get_type`, which
  classes a clock as ultra bullet, bullet, blitz, rapid or classical from
  `increment * 40 + limit`; `ChallengeRequest`; and the rating records
  returned for users and online bots (`UserDetails`, `UserDetailsPerfs`,
  `UserDetailsGamePerf`, `OnlineBot`), each with `from_json`.
- `myopicbot.lichess`: `LichessClient`, an asynchronous bot-API client
  (usable with `async with`): `get_our_profile`, `post_challenge_response`,
  `abort_game`, `post_move`, `post_chatline` (to a `LichessChatRoom`),
  `create_challenge`, `fetch_rating`, `fetch_online_bots`,
  `get_our_live_games` and `aclose`. Failed requests and undecodable
  responses raise `LichessError`; `post_move` also raises it for a
  non-success status.
- `myopicbot.events`: `parse_lichess_event` / `parse_lichess_event_json`
  decode account events into `GameStart` or `Challenge`; a challenge's time
  control is `Unlimited`, `Correspondence` or `ClockTimeControl`.
- `myopicbot.game_events`: `parse_game_event` / `parse_game_event_json`
  decode in-game events into `GameFull`, `GameState`, `ChatLine` or
  `OpponentGone`.
- `myopicbot.stream`: `handle_stream(chunks, handler)` splits each received
  chunk into lines and feeds them to the handler until it returns a `Break`,
  whose value is returned.
- `myopicbot.userstatus`: `StatusService.user_status()` fetches whether the
  bot account is online at most once per polling interval, returning `None`
  in between. `parse_user_statuses` and `fetch_user_status` are the pieces
  it uses.
- `myopicbot.event_stream`: `stream(params, processor)` keeps the account
  event stream open, hands each event to your `EventProcessor`, closes the
  stream when it has been open longer than `max_lifespan` or the account is
  reported offline, and reopens it after `retry_wait`.
- `myopicbot.game`: `CancellationHook`, `EmptyCancellationHook`, the
  `INTRO` chat message and `LichessService`, which ties a client to one game.
- `myopicbot.openings`: `OpeningTable` (with `from_json` / `to_json`),
  `MoveRecord.parse` for `move:frequency` strings, `position_index` (the
  first three fields of a FEN) and `choose_move`, which picks a move with
  probability proportional to its frequency.
- `myopicbot.game_stream`: `read_games(path)` and `iter_games(lines)` yield
  the move text of each game in a PGN file, its numbered lines joined by
  spaces; `is_game_start` and `is_game_continuation` classify lines.
- `myopicbot.position_store`: `PositionStore` counts how often each move
  was seen from each position and keeps `StoreStats`; `ExtractionErrors`
  records, per file, the indices of games that could not be read or parsed.
- `myopicbot.uploader`: `parse_args` reads the upload options,
  `load_write_requests` turns a file of one JSON entry per line into
  put-request items, and `draw_n_entries` takes batches off the list.

## Reacting to events

Subclass `EventProcessor` and pass it to `stream` with a `StreamParams`:

```python
import asyncio
from datetime import timedelta

from myopicbot.event_stream import EventProcessor, StreamParams, stream
from myopicbot.events import Challenge, GameStart


class Printer(EventProcessor):
    async def process(self, event):
        if isinstance(event, Challenge):
            print("challenged by", event.challenger.id)
        elif isinstance(event, GameStart):
            print("game", event.id, "against", event.opponent.id)


params = StreamParams(
    status_poll_frequency=timedelta(minutes=1),
    max_lifespan=timedelta(hours=1),
    retry_wait=timedelta(seconds=30),
    our_bot_id="my-bot",
    auth_token="token",
)

asyncio.run(stream(params, Printer()))
```

`stream` runs until it is cancelled. Lines that cannot be decoded are logged
and skipped.

## Parsing game events

```python
from myopicbot.game_events import GameState, parse_game_event_json

event = parse_game_event_json(
    '{"type": "gameState", "moves": "e2e4 c7c5", "wtime": 1000, '
    '"btime": 1000, "winc": 0, "binc": 0, "status": "started"}'
)
assert isinstance(event, GameState)
```

Malformed game events raise `GameEventError`; malformed account events raise
`EventParseError`. Both are subclasses of `ValueError`.

## Choosing a book move

```python
from myopicbot.openings import choose_move

choose_move(["e2e4:3", "d2d4:1"])  # "e2e4" three times in four
```

Entries that do not parse are ignored; if the frequencies add up to zero a
`ValueError` is raised.

## Reading PGN files

```python
from myopicbot.game_stream import read_games

for game in read_games("games.pgn"):
    print(game)
```

## What this package does not do

- It has no chess engine and no board logic: it cannot compute moves,
  replay move text into positions or produce FENs. `PositionStore` is given
  positions and moves by its caller.
- It does not look up book moves or endgame moves in any remote table.
- The uploader module prepares write requests but does not send them; there
  is no command that runs an upload or a PGN extraction.
- It does not play games: there is no loop over a game's event stream.

## Running the tests

Install the `test` extra and run `pytest` from the project directory.