from datetime import date

from services.date_dialogue import handle_date_turn
from services.history import render_availability_header


def main():
    today = date(2025, 9, 20)
    conversation = ["Přijedeme 15–17.8", "tento měsíc"]

    pending_ask = None
    for user_text in conversation:
        print("Guest:", user_text)
        turn = handle_date_turn(user_text, previous_ask=pending_ask, now=today)
        print("Decision:", turn.as_dict())

        if turn.ask:
            print("Assistant:", turn.ask)
            pending_ask = turn.ask
        elif turn.interval:
            print("Assistant:", render_availability_header(turn.interval))
            print("Nights to check:", turn.interval.nights())
            pending_ask = None
        else:
            print("Assistant: Napište prosím termín příjezdu a odjezdu.")

if __name__ == "__main__":
    main()
