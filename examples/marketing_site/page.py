import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from headings import create_scope
from headings.ui import Document

from components.sections import FAQ, Footer, Hero, ProblemSolution, Services, Testimonials

OUTPUT_PATH = ROOT / "output" / "index.html"

CONTENT = {
    "brand": "PRO TRAINER",
    "headline": "Body transformation in 90 days",
    "tagline": "Personal training with daily check-ins and a plan built for you.",
    "problems": [
        {"title": "Generic workouts", "body": "Copy-paste plans ignore your routine."},
        {"title": "No follow-up", "body": "Nobody adjusts the plan when progress stalls."},
    ],
    "solutions": [
        {"title": "Personal plan", "body": "Training and nutrition built around your goals."},
        {"title": "Weekly adjustments", "body": "Check-ins keep the plan on track."},
    ],
    "services": [
        {"title": "Monthly", "price": "$97"},
        {"title": "Quarterly", "price": "$247"},
        {"title": "Yearly", "price": "$797"},
    ],
    "testimonials": [
        {"name": "Ana", "quote": "Lost 9kg and kept it off."},
        {"name": "Bruno", "quote": "First plan I actually finished."},
    ],
    "faq": [
        {"question": "How soon will I see results?", "answer": "Most clients notice changes in 30 days."},
        {"question": "Do I need gym experience?", "answer": "No, plans start from your current level."},
    ],
}


def build_page(scope=None, content=None):
    data = dict(CONTENT if content is None else content)
    scope = scope if scope is not None else create_scope(name="home")

    @Document(title=f"{data['brand']} | {data['headline']}")
    def home():
        with scope.begin_pass():
            return [
                Hero(scope=scope, headline=data["headline"], tagline=data["tagline"]),
                ProblemSolution(scope=scope, problems=data["problems"], solutions=data["solutions"]),
                Testimonials(scope=scope, testimonials=data["testimonials"]),
                Services(scope=scope, services=data["services"]),
                FAQ(scope=scope, faq=data["faq"]),
                Footer(scope=scope, brand=data["brand"]),
            ]

    return home(), scope


def main():
    artifact, scope = build_page(create_scope(name="home", mode="warn"))
    artifact.emit_html(OUTPUT_PATH, hierarchy_mode="warn")
    print(f"[page] wrote {OUTPUT_PATH} ({len(scope.events)} headings, {len(scope.violations)} violations)")


if __name__ == "__main__":
    main()
