import logging
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from typing import Optional

from backend.config import settings
from backend.database import SessionLocal, init_db
from backend.crud import (
    create_user, get_user, get_user_by_email,
    get_learning_plan, get_learning_plans, update_learning_plan,
    delete_learning_plan, follow_plan, unfollow_plan,
    toggle_topic_completion,
    create_post, get_posts, update_post, delete_post, like_post, unlike_post
)
from backend.errors import LearningPlanError
from backend.generator import get_generator
from backend.schemas import (
    UserCreate, LearningPlanGenerationRequest, LearningPlanUpdate, PostCreate, PostUpdate,
    plan_to_response, post_to_response
)

app = typer.Typer(help="Learning Plans CLI - generate and track learning plans")
console = Console()


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs")):
    """Configure logging for every command"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)]
    )


def _require_user(db, user_id: int):
    user = get_user(db, user_id)
    if not user:
        console.print(f"[red]✗[/red] User ID {user_id} not found")
        raise typer.Exit(code=1)
    return user


def _print_plan(plan):
    """Render a plan with its topics and resources"""
    dto = plan_to_response(plan)
    console.print(f"\n[bold]{dto.title}[/bold] (ID: {dto.id}, v{dto.version})")
    if dto.description:
        console.print(f"  {dto.description}")
    console.print(f"  Subject: {dto.subject}")
    console.print(f"  Estimated days: {dto.estimated_days}")
    console.print(f"  Completion: {dto.completion_percentage:.1f}%")
    console.print(f"  Followers: {dto.followers}")
    if dto.user:
        console.print(f"  Owner: {dto.user.name} (@{dto.user.username})")

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Topic", style="green")
    table.add_column("Done", justify="center")
    for topic in dto.topics:
        table.add_row(str(topic.id), topic.title, "✓" if topic.completed else "")
    console.print(table)

    if dto.resources:
        console.print("[bold]Resources:[/bold]")
        for resource in dto.resources:
            console.print(f"  ({resource.type}) {resource.title} - {resource.url}")


@app.command()
def init():
    """Initialize database tables"""
    init_db()
    console.print("[green]✓[/green] Database initialized successfully!")


@app.command()
def reset_db():
    """Delete all data and reinitialize database (WARNING: irreversible!)"""
    confirm = typer.confirm("⚠️  This will DELETE ALL DATA. Are you sure?")
    if not confirm:
        console.print("[yellow]Cancelled.[/yellow]")
        return

    from backend.database import engine, Base
    import backend.models  # noqa: F401
    console.print("[yellow]Dropping all tables...[/yellow]")
    Base.metadata.drop_all(bind=engine)
    console.print("[yellow]Recreating tables...[/yellow]")
    Base.metadata.create_all(bind=engine)
    console.print("[green]✓[/green] Database reset complete! All data deleted.")


@app.command()
def create_profile(
    email: str = typer.Option(..., prompt="Email"),
    first_name: Optional[str] = typer.Option(None, help="First name"),
    last_name: Optional[str] = typer.Option(None, help="Last name")
):
    """Create a new user"""
    db = SessionLocal()
    try:
        if get_user_by_email(db, email):
            console.print(f"[red]✗[/red] A user with email {email} already exists")
            raise typer.Exit(code=1)

        user = create_user(db, UserCreate(email=email, first_name=first_name, last_name=last_name))
        console.print(f"[green]✓[/green] User created successfully! User ID: {user.id}")
    finally:
        db.close()


@app.command()
def view_profile(user_id: int):
    """View a user and their plans"""
    db = SessionLocal()
    try:
        user = _require_user(db, user_id)
        console.print("\n[bold]User Profile[/bold]")
        console.print(f"  ID: {user.id}")
        console.print(f"  Email: {user.email}")
        if user.first_name or user.last_name:
            console.print(f"  Name: {user.first_name or ''} {user.last_name or ''}".rstrip())
        console.print(f"  Learning plans: {len(user.learning_plans)}")
    finally:
        db.close()


@app.command()
def generate_plan(
    user_id: int = typer.Option(..., prompt="User ID"),
    subject: str = typer.Option(..., prompt="Subject (e.g., maths, english, science)"),
    difficulty: str = typer.Option(..., prompt="Difficulty (beginner/intermediate/advanced)"),
    days: Optional[int] = typer.Option(None, help="Estimated days to complete (default from config)"),
    description: Optional[str] = typer.Option(None, help="Custom description"),
    seed: Optional[int] = typer.Option(None, help="Random seed for topic selection")
):
    """Generate a learning plan from the curated topic tables"""
    db = SessionLocal()
    try:
        user = _require_user(db, user_id)
        request = LearningPlanGenerationRequest(
            subject=subject,
            difficulty=difficulty,
            estimated_days=days,
            description=description
        )
        plan = get_generator(seed).generate_learning_plan(db, request, user)
        console.print("[green]✓[/green] [bold]Learning plan generated![/bold]")
        _print_plan(plan)
    finally:
        db.close()


@app.command()
def list_plans(user_id: Optional[str] = typer.Option(None, help="Only plans owned by this user")):
    """List learning plans"""
    db = SessionLocal()
    try:
        plans = get_learning_plans(db, user_id)
        if not plans:
            console.print("[yellow]No learning plans found[/yellow]")
            return

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("ID", style="cyan", justify="right")
        table.add_column("Title", style="green")
        table.add_column("Subject")
        table.add_column("Topics", justify="right")
        table.add_column("Complete", style="yellow", justify="right")
        table.add_column("Followers", style="blue", justify="right")

        for plan in plans:
            table.add_row(
                str(plan.id),
                plan.title,
                plan.subject or "",
                str(len(plan.topics)),
                f"{plan.completion_percentage:.0f}%",
                str(plan.followers)
            )
        console.print(table)
    except LearningPlanError as e:
        console.print(f"[red]✗[/red] {e.message}")
        raise typer.Exit(code=1)
    finally:
        db.close()


@app.command()
def view_plan(plan_id: int):
    """Show a learning plan with topics and resources"""
    db = SessionLocal()
    try:
        plan = get_learning_plan(db, plan_id)
        if not plan:
            console.print(f"[red]✗[/red] Learning plan {plan_id} not found")
            raise typer.Exit(code=1)
        _print_plan(plan)
    finally:
        db.close()


@app.command()
def toggle_topic(
    user_id: int = typer.Option(..., prompt="User ID"),
    plan_id: int = typer.Option(..., prompt="Plan ID"),
    topic_id: int = typer.Option(..., prompt="Topic ID")
):
    """Mark a topic done (or not done) and update plan progress"""
    db = SessionLocal()
    try:
        user = _require_user(db, user_id)
        plan = toggle_topic_completion(db, plan_id, topic_id, user)
        console.print(f"[green]✓[/green] Plan {plan.id} is now {plan.completion_percentage:.1f}% complete")
    except LearningPlanError as e:
        console.print(f"[red]✗[/red] {e.message}")
        raise typer.Exit(code=1)
    finally:
        db.close()


@app.command()
def follow(
    user_id: int = typer.Option(..., prompt="User ID"),
    plan_id: int = typer.Option(..., prompt="Plan ID")
):
    """Follow a learning plan"""
    db = SessionLocal()
    try:
        user = _require_user(db, user_id)
        plan = follow_plan(db, plan_id, user)
        console.print(f"[green]✓[/green] Following '{plan.title}' ({plan.followers} followers)")
    except LearningPlanError as e:
        console.print(f"[red]✗[/red] {e.message}")
        raise typer.Exit(code=1)
    finally:
        db.close()


@app.command()
def unfollow(
    user_id: int = typer.Option(..., prompt="User ID"),
    plan_id: int = typer.Option(..., prompt="Plan ID")
):
    """Stop following a learning plan"""
    db = SessionLocal()
    try:
        user = _require_user(db, user_id)
        plan = unfollow_plan(db, plan_id, user)
        console.print(f"[green]✓[/green] Unfollowed '{plan.title}' ({plan.followers} followers)")
    except LearningPlanError as e:
        console.print(f"[red]✗[/red] {e.message}")
        raise typer.Exit(code=1)
    finally:
        db.close()


@app.command()
def update_plan(
    user_id: int = typer.Option(..., prompt="User ID"),
    plan_id: int = typer.Option(..., prompt="Plan ID"),
    title: Optional[str] = typer.Option(None, help="New title"),
    description: Optional[str] = typer.Option(None, help="New description"),
    subject: Optional[str] = typer.Option(None, help="New subject"),
    days: Optional[int] = typer.Option(None, help="New estimated days")
):
    """Edit a learning plan you own"""
    db = SessionLocal()
    try:
        user = _require_user(db, user_id)
        plan = get_learning_plan(db, plan_id)
        if not plan:
            console.print(f"[red]✗[/red] Learning plan {plan_id} not found")
            raise typer.Exit(code=1)

        plan_update = LearningPlanUpdate(
            title=title or plan.title,
            description=description if description is not None else plan.description,
            subject=subject or plan.subject,
            estimated_days=days or plan.estimated_days,
            version=plan.version
        )
        plan = update_learning_plan(db, plan_id, plan_update, user)
        console.print(f"[green]✓[/green] Learning plan updated!")
        _print_plan(plan)
    except LearningPlanError as e:
        console.print(f"[red]✗[/red] {e.message}")
        raise typer.Exit(code=1)
    finally:
        db.close()


@app.command()
def delete_plan(
    user_id: int = typer.Option(..., prompt="User ID"),
    plan_id: int = typer.Option(..., prompt="Plan ID")
):
    """Delete a learning plan you own"""
    db = SessionLocal()
    try:
        user = _require_user(db, user_id)
        delete_learning_plan(db, plan_id, user)
        console.print(f"[green]✓[/green] Learning plan {plan_id} deleted")
    except LearningPlanError as e:
        console.print(f"[red]✗[/red] {e.message}")
        raise typer.Exit(code=1)
    finally:
        db.close()


@app.command("create-post")
def add_post(
    user_id: int = typer.Option(..., prompt="User ID"),
    description: str = typer.Option(..., prompt="Description"),
    url: Optional[str] = typer.Option(None, help="URL of an already-hosted image")
):
    """Share a post"""
    db = SessionLocal()
    try:
        user = _require_user(db, user_id)
        post = create_post(db, PostCreate(description=description, url=url), user)
        console.print(f"[green]✓[/green] Post created! Post ID: {post.id}")
    except LearningPlanError as e:
        console.print(f"[red]✗[/red] {e.message}")
        raise typer.Exit(code=1)
    finally:
        db.close()


@app.command()
def list_posts():
    """List posts, newest first"""
    db = SessionLocal()
    try:
        posts = get_posts(db)
        if not posts:
            console.print("[yellow]No posts found[/yellow]")
            return

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("ID", style="cyan", justify="right")
        table.add_column("Author", style="green")
        table.add_column("Post")
        table.add_column("Likes", style="blue", justify="right")
        table.add_column("Posted", style="dim")

        for dto in map(post_to_response, posts):
            table.add_row(
                str(dto.id),
                dto.user.name if dto.user else "",
                dto.description,
                str(dto.like_count),
                dto.created_at.strftime("%Y-%m-%d %H:%M") if dto.created_at else ""
            )
        console.print(table)
    finally:
        db.close()


@app.command("update-post")
def edit_post(
    user_id: int = typer.Option(..., prompt="User ID"),
    post_id: int = typer.Option(..., prompt="Post ID"),
    description: Optional[str] = typer.Option(None, help="New description"),
    url: Optional[str] = typer.Option(None, help="New image URL")
):
    """Edit a post you wrote"""
    db = SessionLocal()
    try:
        user = _require_user(db, user_id)
        post = update_post(db, post_id, PostUpdate(description=description, url=url), user)
        console.print(f"[green]✓[/green] Post {post.id} updated")
    except LearningPlanError as e:
        console.print(f"[red]✗[/red] {e.message}")
        raise typer.Exit(code=1)
    finally:
        db.close()


@app.command("delete-post")
def remove_post(
    user_id: int = typer.Option(..., prompt="User ID"),
    post_id: int = typer.Option(..., prompt="Post ID")
):
    """Delete a post you wrote"""
    db = SessionLocal()
    try:
        user = _require_user(db, user_id)
        delete_post(db, post_id, user)
        console.print(f"[green]✓[/green] Post {post_id} deleted")
    except LearningPlanError as e:
        console.print(f"[red]✗[/red] {e.message}")
        raise typer.Exit(code=1)
    finally:
        db.close()


@app.command()
def like(
    user_id: int = typer.Option(..., prompt="User ID"),
    post_id: int = typer.Option(..., prompt="Post ID")
):
    """Like a post"""
    db = SessionLocal()
    try:
        user = _require_user(db, user_id)
        post = like_post(db, post_id, user)
        console.print(f"[green]✓[/green] Liked post {post.id} ({len(post.likes)} likes)")
    except LearningPlanError as e:
        console.print(f"[red]✗[/red] {e.message}")
        raise typer.Exit(code=1)
    finally:
        db.close()


@app.command()
def unlike(
    user_id: int = typer.Option(..., prompt="User ID"),
    post_id: int = typer.Option(..., prompt="Post ID")
):
    """Remove your like from a post"""
    db = SessionLocal()
    try:
        user = _require_user(db, user_id)
        post = unlike_post(db, post_id, user)
        console.print(f"[green]✓[/green] Unliked post {post.id} ({len(post.likes)} likes)")
    except LearningPlanError as e:
        console.print(f"[red]✗[/red] {e.message}")
        raise typer.Exit(code=1)
    finally:
        db.close()


if __name__ == "__main__":
    app()
