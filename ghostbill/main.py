# main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from ghostbill.domain.schemas.database import init_db
from ghostbill.core.recurring_transactions_service import RecurringTransactionsService
from ghostbill.infrastructure.scheduler.scheduler_service import build_scheduler, schedule_recurring_sweep
from ghostbill.api import analytics, categorizer, export, feedback, profiles, recurring, transactions

app = FastAPI(title="GhostBill API", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"], allow_credentials=True, allow_methods=["*"], allow_headers=["*"],
)

# Keep a reference on the app state
app.state.scheduler = None

@app.on_event("startup")
async def on_startup():
    # DB init
    init_db()

    # Catch up anything that fell due while the service was down, then sweep daily
    service = RecurringTransactionsService()
    service.roll_forward_due()

    sched = build_scheduler()
    schedule_recurring_sweep(sched, service)
    sched.start()
    app.state.scheduler = sched


@app.on_event("shutdown")
async def on_shutdown():
    sched = getattr(app.state, "scheduler", None)
    if sched:
        sched.shutdown(wait=False)


app.include_router(profiles.router)
app.include_router(transactions.router)
app.include_router(recurring.router)
app.include_router(feedback.router)
app.include_router(analytics.router)
app.include_router(export.router)
app.include_router(categorizer.router)
