"""
Lunch-Rush Station Rotation

Builds today's rotation across the three lunch-rush hours:
- Essential stations (P.O.S., Grill 1, Expo 1, Fries, Expo 2) are filled first
- Nobody works the same station twice in a day
- Hot stations (grills, fries) are spread out, at most one per person when possible
- Preferences, the last 7 days of history and yesterday's slots steer each pick
"""

from rotation.cli import main


if __name__ == "__main__":
    main()
