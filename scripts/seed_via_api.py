import subprocess
import time
import json
import os
import signal
import requests
import random
from decimal import Decimal
from datetime import date, timedelta
from faker import Faker

# --- Configuration ---
BASE_URL = "http://127.0.0.1:8000"
UVICORN_COMMAND = ["uvicorn", "life_tracker.main:app"]
# The server defaults to an in-memory store; seed a file so the data outlives this script
DB_URL = os.environ.get("DATABASE_URL", "sqlite:///life_tracker.db")

fake = Faker()

HABIT_NAMES = ["Morning run", "Read 20 pages", "Meditate", "Drink 2L water", "No sugar", "Practice guitar"]
EXPENSE_CATEGORIES = ["Groceries", "Rent", "Utilities", "Transport", "Restaurants", "Entertainment"]
INCOME_CATEGORIES = ["Salary", "Freelance", "Gifts"]


# --- Helper Function for API Requests ---
def run_api_request(method: str, endpoint: str, data: dict = None):
    """Makes an API request and returns the JSON response."""
    url = f"{BASE_URL}{endpoint}"
    try:
        # The default json encoder in requests cannot handle Decimal or date
        json_data = json.dumps(data, default=str) if data else None
        headers = {'Content-Type': 'application/json'} if json_data else None
        response = requests.request(method, url, data=json_data, headers=headers, timeout=10)
        response.raise_for_status()
        if not response.text:
            return None
        return response.json()
    except requests.exceptions.HTTPError as e:
        print(f"Error: HTTP {e.response.status_code} for {url}\nResponse: {e.response.text}")
        return None
    except requests.exceptions.RequestException as e:
        print(f"An unexpected error occurred: {e}")
        return None


def seed_notes(count: int = 15):
    print("--- Seeding Notes ---")
    notes = []
    for _ in range(count):
        note = run_api_request("POST", "/api/notes", {
            "title": fake.sentence(nb_words=4).rstrip("."),
            "content": "\n\n".join(fake.paragraphs(nb=random.randint(1, 3))),
        })
        if note:
            notes.append(note)
    return notes


def seed_habits(days_back: int = 45):
    print("--- Seeding Habits ---")
    habits = []
    for name in HABIT_NAMES:
        habit = run_api_request("POST", "/api/habits", {"name": name, "description": fake.sentence()})
        if habit:
            habits.append(habit)

    print("--- Seeding Habit Logs ---")
    today = date.today()
    for habit in habits:
        # Each habit gets its own hit rate so the streaks differ
        hit_rate = random.uniform(0.5, 0.95)
        for offset in range(days_back, -1, -1):
            if random.random() < 0.15:
                continue  # unlogged day
            run_api_request("POST", "/api/habit-logs", {
                "habitId": habit["id"],
                "date": (today - timedelta(days=offset)).isoformat(),
                "completed": random.random() < hit_rate,
            })
    return habits


def seed_transactions(count: int = 120):
    print("--- Seeding Transactions ---")
    transactions = []
    for _ in range(count):
        is_income = random.random() < 0.2
        transaction = run_api_request("POST", "/api/transactions", {
            "title": fake.company() if is_income else fake.bs().capitalize(),
            "amount": Decimal(random.uniform(500, 4000) if is_income else random.uniform(3, 400)).quantize(Decimal('0.01')),
            "type": "income" if is_income else "expense",
            "category": random.choice(INCOME_CATEGORIES if is_income else EXPENSE_CATEGORIES),
            "date": fake.date_time_between(start_date="-90d", end_date="now").isoformat(),
        })
        if transaction:
            transactions.append(transaction)
    return transactions


def seed_checklists(count: int = 5):
    print("--- Seeding Checklists ---")
    checklists = []
    for _ in range(count):
        checklist = run_api_request("POST", "/api/checklists", {"title": fake.catch_phrase()})
        if not checklist:
            continue
        checklists.append(checklist)
        for order in range(random.randint(3, 8)):
            run_api_request("POST", "/api/checklist-items", {
                "checklistId": checklist["id"],
                "title": fake.sentence(nb_words=3).rstrip("."),
                "completed": random.random() < 0.6,
                "order": order,
            })
    return checklists


def seed_goals(count: int = 6):
    print("--- Seeding Goals ---")
    goals = []
    units = [("books", 12, 52), ("km", 100, 1000), ("dollars", 1000, 10000), ("days", 30, 365)]
    for _ in range(count):
        unit, low, high = random.choice(units)
        target = random.randint(low, high)
        status = random.choice(["not_started", "in_progress", "in_progress", "completed", "on_hold"])
        current = target if status == "completed" else random.randint(0, target)
        goal = run_api_request("POST", "/api/goals", {
            "title": fake.sentence(nb_words=5).rstrip("."),
            "description": fake.paragraph(),
            "targetValue": target,
            "currentValue": current,
            "unit": unit,
            "status": status,
            "targetDate": fake.date_time_between(start_date="-10d", end_date="+120d").isoformat(),
            "motivationMedia": [fake.image_url() for _ in range(random.randint(0, 2))],
        })
        if goal:
            goals.append(goal)
    return goals


def main():
    """Starts the server, seeds sample data, and shuts down the server."""

    env = dict(os.environ, DATABASE_URL=DB_URL)

    print("--- Resetting database with Alembic ---")
    try:
        print("Downgrading database...")
        subprocess.run(["alembic", "downgrade", "base"], check=True, capture_output=True, text=True, env=env)
        print("Upgrading database...")
        subprocess.run(["alembic", "upgrade", "head"], check=True, capture_output=True, text=True, env=env)
        print("Database reset successfully.")
    except (subprocess.CalledProcessError, FileNotFoundError) as e:
        print(f"Error during database reset: {e}")
        if hasattr(e, 'stderr') and e.stderr:
            print(e.stderr)
        return

    server_process = subprocess.Popen(UVICORN_COMMAND, env=env)
    time.sleep(5)
    print(f"Server started with PID: {server_process.pid}")

    try:
        seed_notes()
        seed_habits()
        seed_transactions()
        seed_checklists()
        seed_goals()

        stats = run_api_request("GET", "/api/dashboard/stats")
        if stats:
            print(f"Dashboard: {stats}")

        print("\n--- Seeding Complete ---")

    finally:
        if server_process:
            print("\n--- Shutting down server ---")
            os.kill(server_process.pid, signal.SIGTERM)
            server_process.wait()
            print("Server shut down.")


if __name__ == "__main__":
    main()
