"""
Command Line Interface for WorkTrack.
"""

import click
from datetime import date
from pathlib import Path
from .version import VERSION
from .data import DataCore
from .logs import setup_logging
from .models import TaskFilter, TaskPatch, TaskStatus
from .recovery import AuthError, RecoverableError, WorkTrackError
from . import reports

STATUS_PROMPT = "Status (0-Pending,1-InProgress,2-Completed)"
DATE_FORMATS = ["%Y-%m-%d"]


def _status_choice():
    return click.Choice([s.value for s in TaskStatus], case_sensitive=False)


def print_tasks(tasks):
    click.echo("TaskId | EmpId | Name                 | Hours |     Status | Date       | Due        | Comments")
    for t in tasks:
        click.echo(f"{t.id:>6} | {t.employee_id:>5} | {t.name:<20} | {t.hours_spent:>5g} | "
                   f"{t.status.value:>10} | {t.created_on:%Y-%m-%d} | {t.due_date:%Y-%m-%d} | {len(t.comments)}")


def print_timesheet(entries):
    if not entries:
        click.echo("📭 No hours logged")
        return
    for entry in entries:
        click.echo(f"   {entry.period}: {entry.hours:g}h over {entry.task_count} task(s)")


def print_weekly_hours(rows):
    click.echo("⏱️  Hours this week:")
    for row in rows:
        click.echo(f"   {row.name}: {row.hours:g}h")


def print_top_performers(scores):
    if not scores:
        click.echo("📭 No completed work yet")
        return
    click.echo("🏆 Top performers:")
    for score in scores:
        click.echo(f"   {score.rank}. {score.name} - {score.completed_hours:g}h "
                   f"({score.completed_tasks} completed)")


def print_groups(groups):
    for employee, tasks in groups.items():
        click.echo(f"👤 {employee.name} ({employee.department}) - {len(tasks)} task(s)")
        for t in tasks:
            click.echo(f"   #{t.id} {t.name} [{t.status.value}] {t.hours_spent:g}h")


def print_overdue(service, today=None):
    overdue = service.overdue_tasks(today)
    if not overdue:
        click.echo("✅ No overdue tasks")
        return
    click.echo("⏰ Overdue Tasks:")
    for t in overdue:
        owner = service.find_employee(t.employee_id)
        click.echo(f"- {t.name} (Emp: {owner.name if owner else t.employee_id}) Due: {t.due_date:%Y-%m-%d}")


def print_dashboard(summary):
    click.echo(f"📊 Dashboard ({summary.generated_on:%Y-%m-%d})")
    click.echo(f"   📋 Tasks: {summary.total_tasks}")
    for status, count in summary.status_counts.items():
        click.echo(f"      {status}: {count}")
    click.echo(f"   ⏱️  Hours: {summary.total_hours:g} (avg {summary.average_hours:.2f} per task)")
    click.echo(f"   ✅ Completion rate: {summary.completion_rate:.0%}")
    click.echo(f"   ⏰ Overdue: {summary.overdue_tasks}")


def _optional(prompt, convert):
    """Prompt for a value that may be left blank; blank or unparsable input keeps the current value."""
    raw = click.prompt(prompt, default="", show_default=False).strip()
    if not raw:
        return None
    try:
        return convert(raw)
    except ValueError:
        click.echo("⚠ Invalid value, keeping the current one.")
        return None


def _prompt_date(prompt):
    return click.prompt(prompt, type=click.DateTime(formats=DATE_FORMATS)).date()


# ---- employee menu actions ----

def _create_task(tracker, user):
    click.echo("=== Create Task ===")
    name = click.prompt("Task Name")
    hours = click.prompt("Hours Spent (numeric)", type=float)
    status = click.prompt(STATUS_PROMPT, type=click.IntRange(0, 2))
    due = _prompt_date("Due Date (yyyy-mm-dd)")
    task = tracker.service.create_task(user, name, hours, status, due)
    click.echo(f"✔ Task {task.id} created successfully.")


def _update_task(tracker, user):
    print_tasks(tracker.service.tasks_owned_by(user.id))
    task_id = click.prompt("Enter TaskId to update", type=int)
    task = tracker.service.find_task(task_id)
    if task is None or task.employee_id != user.id:
        click.echo("⚠ Task not found.")
        return

    def status_index(raw):
        return TaskStatus.parse(int(raw))

    patch = TaskPatch(
        name=_optional(f"New Name ({task.name})", str),
        hours_spent=_optional(f"New Hours ({task.hours_spent:g})", float),
        status=_optional(f"New Status ({list(TaskStatus).index(task.status)})", status_index),
        due_date=_optional(f"New Due ({task.due_date:%Y-%m-%d})", date.fromisoformat),
    )
    if patch.is_empty():
        click.echo("💡 Nothing to update.")
        return
    tracker.service.update_task(user, task_id, patch)
    click.echo("✔ Task updated successfully.")


def _delete_task(tracker, user):
    print_tasks(tracker.service.tasks_owned_by(user.id))
    task_id = click.prompt("Enter TaskId to delete", type=int)
    tracker.service.delete_task(user, task_id)
    click.echo("✔ Task deleted successfully.")


def _view_my_tasks(tracker, user):
    print_tasks(tracker.service.tasks_owned_by(user.id))


def _comment_or_status(tracker, user):
    print_tasks(tracker.service.tasks_owned_by(user.id))
    task_id = click.prompt("TaskId", type=int)
    op = click.prompt("1) Add Comment  2) Change Status", type=click.IntRange(1, 2))
    if op == 1:
        text = click.prompt("Comment")
        tracker.service.add_comment(user, task_id, text)
        click.echo("✔ Comment added successfully.")
    else:
        status = click.prompt(f"New {STATUS_PROMPT}", type=click.IntRange(0, 2))
        tracker.service.set_status(user, task_id, status)
        click.echo("✔ Status updated.")


def _my_timesheet(tracker, user):
    period = click.prompt("Period", type=click.Choice(reports.PERIODS), default="week")
    print_timesheet(reports.timesheet(tracker.service, user.id, period))


# ---- manager menu actions ----

def _assign_task(tracker, user):
    click.echo("Employees:")
    for e in tracker.service.employees():
        click.echo(f"{e.id} - {e.name} ({e.department})")
    employee_id = click.prompt("Enter EmployeeId to assign", type=int)
    name = click.prompt("Task Name")
    hours = click.prompt("Estimated Hours", type=float)
    due = _prompt_date("Due Date (yyyy-mm-dd)")
    task = tracker.service.assign_task(user, employee_id, name, hours, due)
    click.echo(f"✔ Task {task.id} assigned successfully.")


def _filter_tasks(tracker, user):
    task_filter = TaskFilter(
        employee_id=_optional("EmployeeId (blank for all)", int),
        status=_optional("Status (blank for all)", TaskStatus.parse),
        text=_optional("Name contains (blank for all)", str),
    )
    print_tasks(tracker.service.list_tasks(task_filter))


def _export(tracker, user):
    directory = click.prompt("Export directory", default=str(DataCore.export_dir()))
    for path in reports.export_reports(directory, tracker.service):
        click.echo(f"✅ Wrote {path}")


EMPLOYEE_MENU = [
    ("Create Task", _create_task),
    ("Update Task", _update_task),
    ("Delete Task", _delete_task),
    ("View My Tasks", _view_my_tasks),
    ("Add Comment / Update Status", _comment_or_status),
    ("My Weekly / Monthly Timesheet", _my_timesheet),
]

MANAGER_MENU = [
    ("Assign Task to Employee", _assign_task),
    ("View/Filter Tasks", _filter_tasks),
    ("Group Tasks by Employee", lambda tracker, user: print_groups(reports.group_by_employee(tracker.service))),
    ("Weekly Hours (All Employees)", lambda tracker, user: print_weekly_hours(reports.weekly_hours(tracker.service))),
    ("Top 3 Performers", lambda tracker, user: print_top_performers(reports.top_performers(tracker.service))),
    ("Overdue Tasks", lambda tracker, user: print_overdue(tracker.service)),
    ("Analytics Dashboard", lambda tracker, user: print_dashboard(reports.dashboard(tracker.service))),
    ("Export CSV Reports", _export),
]


def run_menu(title, actions, tracker, user):
    """Show a numbered menu until the user picks Logout."""
    logout = len(actions) + 1
    while True:
        click.echo(f"-- {title} --")
        for number, (label, _) in enumerate(actions, start=1):
            click.echo(f"{number}. {label}")
        click.echo(f"{logout}. Logout")
        choice = click.prompt("Select", type=int)
        click.echo("")
        if choice == logout:
            return
        if not 1 <= choice < logout:
            click.echo("⚠ Invalid option.")
            continue
        try:
            actions[choice - 1][1](tracker, user)
        except RecoverableError as e:
            click.echo(f"⚠ {e}")
        click.echo("")


@click.group()
@click.version_option(version=VERSION, prog_name="worktrack")
@click.option('--seed-file', type=click.Path(exists=True, dir_okay=False, path_type=Path),
              envvar=DataCore.SEED_FILE_ENV, help='YAML file with employees and tasks to start from')
@click.pass_context
def main(ctx, seed_file):
    """
    WorkTrack - Employee Productivity & Task Tracker.

    State lives in memory only; every run starts from the seed data.
    """
    setup_logging()
    try:
        ctx.obj = DataCore.get_context(seed_file)
    except WorkTrackError as e:
        raise click.ClickException(str(e))


@main.command()
@click.pass_obj
def session(tracker):
    """Log in and work through the employee or manager menu."""
    click.echo("=== Employee Productivity & Task Tracker ===")
    while True:
        click.echo("=== Login === (leave email blank to quit)")
        email = click.prompt("Email", default="", show_default=False).strip()
        if not email:
            click.echo("👋 Goodbye")
            return
        password = click.prompt("Password", hide_input=True)
        try:
            user_session = tracker.auth.login(email, password)
        except AuthError as e:
            click.echo(f"⚠ {e}.")
            continue

        user = user_session.actor
        click.echo(f"✔ Welcome, {user.name}! Role: {user.role.value}")
        if user_session.is_manager:
            run_menu("Manager Menu", MANAGER_MENU, tracker, user)
        else:
            run_menu("Employee Menu", EMPLOYEE_MENU, tracker, user)


@main.command()
@click.option('--employee', 'employee_id', type=int, help='Only tasks owned by this employee id')
@click.option('--status', type=_status_choice(), help='Only tasks in this status')
@click.option('--search', help='Case-insensitive text in the task name')
@click.pass_obj
def tasks(tracker, employee_id, status, search):
    """List tasks, optionally filtered."""
    task_filter = TaskFilter(
        employee_id=employee_id,
        status=TaskStatus.parse(status) if status else None,
        text=search,
    )
    found = tracker.service.list_tasks(task_filter)
    if not found:
        click.echo("📭 No tasks found")
        return
    print_tasks(found)


@main.command()
@click.pass_obj
def overdue(tracker):
    """List tasks past their due date that are not completed."""
    print_overdue(tracker.service)


@main.group()
def report():
    """Read-only productivity reports."""
    pass


@report.command()
@click.option('--employee', 'employee_id', type=int, required=True, help='Employee id')
@click.option('--period', type=click.Choice(reports.PERIODS), default='week', help='Group by ISO week or month')
@click.pass_obj
def timesheet(tracker, employee_id, period):
    """Hours an employee logged per week or month."""
    employee = tracker.service.find_employee(employee_id)
    if employee is None:
        raise click.ClickException(f"Employee {employee_id} not found")
    click.echo(f"🗓️  Timesheet for {employee.name} (by {period}):")
    print_timesheet(reports.timesheet(tracker.service, employee_id, period))


@report.command()
@click.pass_obj
def weekly(tracker):
    """Hours per employee for the current ISO week."""
    print_weekly_hours(reports.weekly_hours(tracker.service))


@report.command()
@click.option('--limit', default=3, show_default=True, help='Number of employees to rank')
@click.pass_obj
def top(tracker, limit):
    """Employees ranked by hours on completed tasks."""
    print_top_performers(reports.top_performers(tracker.service, limit))


@report.command()
@click.pass_obj
def group(tracker):
    """Tasks grouped by employee."""
    print_groups(reports.group_by_employee(tracker.service))


@report.command()
@click.pass_obj
def dashboard(tracker):
    """Headline numbers across all tasks."""
    print_dashboard(reports.dashboard(tracker.service))


@main.command()
@click.option('--output', type=click.Path(file_okay=False, path_type=Path), default=None,
              help='Directory for tasks.csv and summary.yml (default: $WORKTRACK_EXPORT_DIR or ./exports)')
@click.pass_obj
def export(tracker, output):
    """Export tasks as CSV and a YAML summary."""
    try:
        for path in reports.export_reports(output or DataCore.export_dir(), tracker.service):
            click.echo(f"✅ Wrote {path}")
    except WorkTrackError as e:
        raise click.ClickException(f"Error exporting reports: {e}")


if __name__ == "__main__":
    main()
