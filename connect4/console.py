from connect4.app.game import GameSession, CPU_PLAYER, HUMAN_PLAYER
from connect4.app.settings import load_settings, configure_logging
from connect4.core.constants import Player
from connect4.core.errors import GameError


def _player_name(session: GameSession, player: Player) -> str:
    if session.play_against_cpu:
        return "CPU" if player is CPU_PLAYER else "Human"
    return f"Player {'1' if player is Player.A else '2'}"


def play_round(session: GameSession):
    print(session.get_visual_board())

    while session.is_running:
        valid_moves = session.get_valid_moves()
        mover = _player_name(session, session.current_turn)
        user_input = input(f"\n{mover} move (Columns {valid_moves}): ")
        try:
            col = int(user_input)
        except ValueError:
            print("Please enter a valid number.")
            continue

        try:
            records = session.play_turn(col)
        except GameError as e:
            print(f"{e}. Try again.")
            continue

        for record in records[1:]:
            print(f"\nCPU plays Column: {record.column} (eval {record.evaluation}, {record.nodes} nodes)")

        print("\n" + session.get_visual_board())

    if session.winner:
        print(f"\nGame Over! Winner: {_player_name(session, session.winner)}")
    else:
        print("\nGame Over! It's a Draw.")


def main():
    settings = load_settings()
    configure_logging(settings.log_level)

    print("=======================================")
    print("   CONNECT FOUR")
    print("=======================================")

    session = GameSession(
        play_against_cpu=settings.play_against_cpu,
        symbols={HUMAN_PLAYER: settings.human_symbol, CPU_PLAYER: settings.cpu_symbol},
    )

    while True:
        play_round(session)
        score = session.scoreboard.snapshot()
        print(f"Score: {score.player_a} - {score.player_b} (draws: {score.draws})")

        again = input("\nPlay again? [c]pu / [p]layer 2 / anything else quits: ").strip().lower()
        if again.startswith("c"):
            session.new_round(play_against_cpu=True)
        elif again.startswith("p"):
            session.new_round(play_against_cpu=False)
        else:
            break


if __name__ == "__main__":
    main()
